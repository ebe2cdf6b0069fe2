from datetime import date, datetime, time
from decimal import Decimal

from flask import jsonify
from flask.json.provider import DefaultJSONProvider


class PortalJSONProvider(DefaultJSONProvider):
    """ISO dates, plain floats, and value objects exposing to_dict()."""

    @staticmethod
    def default(o):
        if isinstance(o, (date, datetime, time)):
            return o.isoformat()
        if isinstance(o, Decimal):
            return float(o)
        if hasattr(o, 'to_dict'):
            return o.to_dict()
        return DefaultJSONProvider.default(o)


def success(data=None, message=None, status=200, **extra):
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    body.update(extra)
    return jsonify(body), status


def paginated(page, message=None):
    return success(page.items, message, pagination=page.pagination())
