from datetime import datetime

from flask import current_app, request
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError

from health_dashboard.errors import AuthenticationError, BadRequestError, NotFoundError
from health_dashboard.extensions import db
from health_dashboard.helpers import api_response, resolve_user_id
from health_dashboard.models import User
from health_dashboard.schemas import LoginRequest, RegisterRequest


def _issue_token(user):
    return create_access_token(identity=str(user.id), additional_claims={"email": user.email})


def register():
    data = RegisterRequest.model_validate(request.get_json(silent=True) or {})

    if User.query.filter_by(email=data.email).first():
        raise BadRequestError("User already exists")

    user = User(name=data.name, email=data.email, phone=data.phone)
    user.set_password(data.password)
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise BadRequestError("User already exists")

    current_app.logger.info("New user registered: %s", user.email)
    return api_response(
        201,
        message="User registered successfully",
        token=_issue_token(user),
        user=user.to_summary(),
    )


def login():
    data = LoginRequest.model_validate(request.get_json(silent=True) or {})

    user = User.query.filter_by(email=data.email).first()
    if not user or not user.check_password(data.password):
        raise AuthenticationError("Invalid credentials")

    user.last_login = datetime.utcnow()
    db.session.commit()

    current_app.logger.info("User logged in: %s", user.email)
    return api_response(
        message="Login successful",
        token=_issue_token(user),
        user=user.to_summary(),
    )


def me():
    user_id = resolve_user_id(missing_error=AuthenticationError, missing_message="Authentication required")
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return api_response(user=user.to_dict())
