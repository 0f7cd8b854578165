import csv
import io
import logging
from flask import Blueprint, request, Response
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from weightlog.repositories import EntryNotFoundError, RepositoryUnavailable
from weightlog.schemas.weight_entry_schemas import WeightEntrySchema, WeightEntryUpdateSchema
from weightlog.services.range_filter import RangeFilter
from weightlog.services.trend_analyzer import TrendAnalyzer
from weightlog.services.weight_service import WeightService, EntryValidationError
from weightlog.routes.helpers import get_current_user, error_response, success_response, parse_time_range

logger = logging.getLogger(__name__)

entries_bp = Blueprint('entries', __name__)

#ROUTES

# ------------------------------
#BASIC CRUD ROUTES

#get all weight entries, newest first, each with its step trend
@entries_bp.route('', methods=['GET'])
@jwt_required()
def list_entries():
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    entries = WeightService.list_entries(user_id)
    return success_response(
        "Weight entries retrieved successfully",
        {
            'entries': [
                {**entry.to_dict(), 'trend': TrendAnalyzer.step_trend(entry, index, entries)}
                for index, entry in enumerate(entries)
            ],
            'count': len(entries)
        }
    )


@entries_bp.route('', methods=['POST'])
@jwt_required()
def add_entry():
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    try:
        validated_data = WeightEntrySchema().load(request.get_json(silent=True) or {})

        entry = WeightService.add_entry(
            user_id,
            validated_data['weight'],
            validated_data['entry_date']
        )

        return success_response(
            "Weight entry created successfully",
            {'entry': entry.to_dict()}, 201
        )
    except ValidationError as e:
        return error_response("Validation failed", 400, e.messages)
    except EntryValidationError as e:
        return error_response(str(e), 400, e.error.to_dict())
    except RepositoryUnavailable as e:
        return error_response(f"Failed to save weight entry: {str(e)}", 503)


@entries_bp.route('/<entry_id>', methods=['PUT'])
@jwt_required()
def update_entry(entry_id: str):
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    try:
        validated_data = WeightEntryUpdateSchema().load(request.get_json(silent=True) or {})

        entry = WeightService.update_entry(user_id, entry_id, validated_data)

        return success_response(
            "Weight entry updated successfully",
            {'entry': entry.to_dict()}
        )
    except ValidationError as e:
        return error_response("Validation failed", 400, e.messages)
    except EntryNotFoundError as e:
        return error_response(str(e), 404)
    except EntryValidationError as e:
        return error_response(str(e), 400, e.error.to_dict())
    except RepositoryUnavailable as e:
        return error_response(f"Failed to update weight entry: {str(e)}", 503)


@entries_bp.route('/<entry_id>', methods=['DELETE'])
@jwt_required()
def delete_entry(entry_id: str):
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    try:
        WeightService.delete_entry(user_id, entry_id)
        return success_response("Weight entry deleted successfully", {'id': entry_id})
    except EntryNotFoundError as e:
        return error_response(str(e), 404)
    except RepositoryUnavailable as e:
        return error_response(f"Failed to delete weight entry: {str(e)}", 503)


#Export weight entries of a time range as a csv file, oldest first
@entries_bp.route('/export', methods=['GET'])
@jwt_required()
def export_entries():
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    time_range, error = parse_time_range()
    if error:
        return error

    entries = RangeFilter.series_for_range(WeightService.list_entries(user_id), time_range)
    if not entries:
        return error_response("No weight entries found for this time range", 404)

    with io.StringIO() as output:
        csv_writer = csv.writer(output)
        csv_writer.writerow(['entry_date', 'weight'])
        for entry in entries:
            csv_writer.writerow([entry.entry_date.strftime('%Y-%m-%d'), entry.weight])
        csv_content = output.getvalue()

    logger.info("Exported %d entries for user %s", len(entries), user_id)
    return Response(
        csv_content,
        mimetype='text/csv',
        headers={
            'Content-Disposition': f'attachment; filename=weight_entries_{time_range}.csv'
        }
    )
