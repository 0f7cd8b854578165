from typing import Any, Dict, Optional, Tuple
from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity

from weightlog import db
from weightlog.models.user import User
from weightlog.services.weight_constants import VALID_TIME_RANGES, is_valid_time_range


def get_current_user() -> Tuple[User, int]:
    user_id = int(get_jwt_identity())
    user = db.session.get(User, user_id)
    if not user:
        raise ValueError("User not found")
    return user, user_id

def error_response(message: str, status_code: int = 400, details: Dict[str, Any] = None) -> Tuple[Dict, int]:
    response = {'error': message}
    if details:
        response['details'] = details
    return jsonify(response), status_code

def success_response(message: str, data: Dict[str, Any] = None, status_code: int = 200) -> Tuple[Dict, int]:
    response = {'message': message}
    if data is not None:
        response['data'] = data
    return jsonify(response), status_code

def parse_time_range() -> Tuple[Optional[str], Optional[Tuple[Dict, int]]]:
    """
    Reads the time_range query parameter (default 'all').
    Returns: (time_range, None) on success, or (None, error_response) when invalid
    """
    time_range = request.args.get('time_range', 'all')
    if not is_valid_time_range(time_range):
        return None, error_response(
            f"Invalid time_range. Valid: {', '.join(VALID_TIME_RANGES)}",
            400
        )
    return time_range, None
