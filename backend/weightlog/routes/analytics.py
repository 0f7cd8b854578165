from flask import Blueprint, Response
from flask_jwt_extended import jwt_required

from weightlog.services.weight_service import WeightService
from weightlog.services.chart_service import ChartGenerator
from weightlog.routes.helpers import get_current_user, error_response, success_response, parse_time_range

analytics_bp = Blueprint('analytics', __name__)


@analytics_bp.route('/stats', methods=['GET'])
@jwt_required()
def get_stats():
    """
    Statistics for a time range: average, lowest, highest, net change,
    per-entry step trends and the regression trend line.
    """
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    time_range, error = parse_time_range()
    if error:
        return error

    result = WeightService.get_stats(user_id, time_range)
    return success_response("Weight statistics retrieved successfully", result)


@analytics_bp.route('/graph', methods=['GET'])
@jwt_required()
def get_graph():
    """Chronological series for the graph, oldest first."""
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    time_range, error = parse_time_range()
    if error:
        return error

    result = WeightService.get_graph_data(user_id, time_range)
    return success_response("Graph data retrieved successfully", result)


@analytics_bp.route('/chart', methods=['GET'])
@jwt_required()
def get_chart():
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    time_range, error = parse_time_range()
    if error:
        return error

    image_data = ChartGenerator.generate_weight_chart(user_id, time_range)

    # Return image as response (not JSON!)
    return Response(
        image_data,
        mimetype='image/png',
        headers={
            'Content-Disposition': f'inline; filename=weight_chart_{time_range}.png'
        }
    )


@analytics_bp.route('/bmi', methods=['GET'])
@jwt_required()
def get_bmi():
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    result = WeightService.get_bmi(user_id)
    if result['bmi'] is None:
        if not result['height']:
            result['message'] = 'Set your height in your profile to calculate BMI'
        else:
            result['message'] = 'Add a weight entry to calculate BMI'

    return success_response("BMI retrieved successfully", result)


@analytics_bp.route('/goal', methods=['GET'])
@jwt_required()
def get_goal():
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    result = WeightService.get_goal(user_id)
    if result['goal'] is None:
        result['message'] = 'Set a weight goal to track your progress'

    return success_response("Goal progress retrieved successfully", result)


@analytics_bp.route('/dashboard', methods=['GET'])
@jwt_required()
def get_dashboard():
    try:
        _, user_id = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)

    time_range, error = parse_time_range()
    if error:
        return error

    result = WeightService.get_dashboard(user_id, time_range)
    return success_response("Dashboard retrieved successfully", result)
