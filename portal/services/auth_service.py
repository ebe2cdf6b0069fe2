"""
Registration, login and token issuance.

Access and refresh tokens both carry the user id as ``sub``; Flask-JWT-Extended
stamps each with its purpose (``type`` claim) and refuses a refresh token
wherever an access token is required, and the other way round.
"""
import logging

from flask import current_app
from flask_jwt_extended import create_access_token, create_refresh_token

from portal.errors import AuthenticationError, ConflictError
from portal.extensions import bcrypt
from portal.repositories import users
from portal.utils.validation import validate_registration

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid email or password'

# Compared against when the email is unknown so both failure paths cost one
# bcrypt round.
_dummy_digest = None


def _dummy():
    global _dummy_digest
    if _dummy_digest is None:
        _dummy_digest = bcrypt.generate_password_hash('portal-dummy-password').decode('utf-8')
    return _dummy_digest


def public_user(user):
    return {
        'id': user['id'],
        'email': user['email'],
        'role': user['role'],
        'firstName': user['first_name'],
        'lastName': user['last_name'],
        'isVerified': user['is_verified'],
        'isActive': user['is_active'],
        'createdAt': user['created_at'],
    }


def issue_tokens(user):
    identity = str(user['id'])
    claims = {'role': user['role']}
    access_expires = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    return {
        'token': create_access_token(identity=identity, additional_claims=claims, fresh=True),
        'refreshToken': create_refresh_token(identity=identity, additional_claims=claims),
        'tokenType': 'bearer',
        'expiresIn': int(access_expires.total_seconds()),
    }


def register(data):
    fields = validate_registration(data)
    if users.email_exists(fields['email']):
        raise ConflictError('User with this email already exists')

    user = users.create(**fields)
    logger.info("Registered user %s with role %s", user['id'], user['role'])
    return user, issue_tokens(user)


def login(email, password):
    user = users.find_by_email(email)
    if user is None:
        bcrypt.check_password_hash(_dummy(), password)
        logger.info("Failed login for unknown email")
        raise AuthenticationError(INVALID_CREDENTIALS, code='INVALID_CREDENTIALS')
    if not bcrypt.check_password_hash(user['password'], password) or not user['is_active']:
        logger.info("Failed login for user %s", user['id'])
        raise AuthenticationError(INVALID_CREDENTIALS, code='INVALID_CREDENTIALS')

    user.pop('password')
    return user, issue_tokens(user)


def refresh(user):
    """New access token for the (still active) user behind a refresh token."""
    access_expires = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    return {
        'token': create_access_token(
            identity=str(user['id']),
            additional_claims={'role': user['role']},
            fresh=False,
        ),
        'tokenType': 'bearer',
        'expiresIn': int(access_expires.total_seconds()),
    }
