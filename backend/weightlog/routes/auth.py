import logging
from flask import Blueprint, request, jsonify
from flask_jwt_extended import create_access_token, create_refresh_token, get_jwt_identity, jwt_required
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from weightlog import db
from weightlog.models.user import User
from weightlog.schemas.user_schemas import UserRegistrationSchema, UserLoginSchema
from weightlog.routes.helpers import get_current_user, error_response

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}

    # Validate input using schema
    schema = UserRegistrationSchema()
    try:
        validated_data = schema.load(data)
    except ValidationError as err:
        return error_response('Validation failed', 400, err.messages)

    username = validated_data['username']
    email = validated_data['email']
    password = validated_data['password']

    try:
        # Check if user already exists
        if User.query.filter_by(username=username).first():
            return error_response('Username already exists', 409)

        if User.query.filter_by(email=email).first():
            return error_response('Email already exists', 409)

        user = User(username=username, email=email)
        user.set_password(password)

        db.session.add(user)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Registration failed for %s", email)
        return error_response('Registration failed', 500)

    logger.info("Registered user %s", user.id)
    return jsonify({
        'message': 'User registered successfully',
        'user': user.to_dict()
    }), 201

@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}

    schema = UserLoginSchema()
    try:
        validated_data = schema.load(data)
    except ValidationError as err:
        return error_response('Validation failed', 400, err.messages)

    email = validated_data['email']
    password = validated_data['password']

    user = User.query.filter_by(email=email).first()

    # Check if user exists and password is correct
    if not user or not user.check_password(password):
        return error_response('Invalid email or password', 401)

    if not user.is_active:
        return error_response('Account is disabled', 403)

    # Create JWT tokens
    user_identity = str(user.id)
    access_token = create_access_token(identity=user_identity)
    refresh_token = create_refresh_token(identity=user_identity)

    return jsonify({
        'message': 'Login successful',
        'access_token': access_token,
        'refresh_token': refresh_token,
        'user': user.to_dict()
    }), 200

@auth_bp.route('/logout', methods=['POST'])
@jwt_required()
def logout():
    """
    Logout endpoint - for JWT tokens, this is mainly for client-side cleanup.
    The client should simply delete the token.
    """
    current_user_id = get_jwt_identity()

    return jsonify({
        'message': 'Logout successful',
        'user_id': current_user_id,
        'note': 'Please delete the JWT token from client storage'
    }), 200

@auth_bp.route('/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh():
    # Refresh access token using refresh token
    current_user_id = get_jwt_identity()
    new_access_token = create_access_token(identity=current_user_id)

    return jsonify({
        'message': 'Token refreshed successfully',
        'access_token': new_access_token
    }), 200

@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def me():
    try:
        user, _ = get_current_user()
    except ValueError as e:
        return error_response(str(e), 404)
    return jsonify({'user': user.to_dict()}), 200
