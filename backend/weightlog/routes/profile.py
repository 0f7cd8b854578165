from flask import Blueprint, request
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from weightlog.repositories import RepositoryUnavailable
from weightlog.schemas.profile_schemas import ProfileUpdateSchema
from weightlog.services.weight_service import WeightService
from weightlog.routes.helpers import get_current_user, error_response, success_response

profile_bp = Blueprint('profile', __name__)


@profile_bp.route('', methods=['GET'])
@jwt_required()
def get_profile():
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    profile = WeightService.get_profile(user_id)
    return success_response(
        "Profile retrieved successfully",
        {'profile': profile.to_dict() if profile else None}
    )


#merge the given fields into the profile, leaving the others untouched
@profile_bp.route('', methods=['PATCH'])
@jwt_required()
def update_profile():
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    try:
        validated_data = ProfileUpdateSchema().load(request.get_json(silent=True) or {})
        profile = WeightService.update_profile(user_id, validated_data)
        return success_response(
            "Profile updated successfully",
            {'profile': profile.to_dict() if profile else None}
        )
    except ValidationError as e:
        return error_response("Validation failed", 400, e.messages)
    except RepositoryUnavailable as e:
        return error_response(f"Failed to update profile: {str(e)}", 503)
