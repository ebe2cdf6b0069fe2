import logging

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from portal.extensions import db

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health():
    """Liveness: the process is up"""
    return jsonify({'success': True, 'status': 'healthy', 'service': 'patient-portal'}), 200


@health_bp.route('/health/ready', methods=['GET'])
def ready():
    """Readiness: the store answers a trivial query"""
    try:
        db.session.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Readiness check failed: %s", e)
        return jsonify({
            'success': False,
            'status': 'unavailable',
            'code': 'STORE_UNAVAILABLE',
            'message': 'Database unreachable',
        }), 503
    return jsonify({'success': True, 'status': 'ready', 'database': 'connected'}), 200
