from flask import Blueprint, current_app, request

from portal.errors import NotFoundError
from portal.query import options_from_args
from portal.repositories import messages, users
from portal.services.policy import CREATE, DELETE, LIST, READ, UPDATE, ResourceHint, enforce
from portal.utils.decorators import caller_required
from portal.utils.responses import paginated, success
from portal.utils.validation import validate_message

message_bp = Blueprint('message', __name__, url_prefix='/api/messages')


def _get_or_404(message_id):
    message = messages.find_by_id(message_id)
    if not message:
        raise NotFoundError('Message not found.')
    return message


def _hint(message):
    return ResourceHint(sender_id=message['sender_id'], recipient_id=message['recipient_id'])


def _mailbox_options():
    return options_from_args(
        request.args,
        {'unread_only': bool},
        default_limit=current_app.config['MESSAGE_PAGE_LIMIT'],
    )


@message_bp.route('', methods=['POST'])
@caller_required
def send_message(caller):
    """Send a message; the sender is always the caller"""
    data = validate_message(request.get_json(silent=True))
    forced = enforce(caller, 'message', CREATE)
    if not users.find_active(data['recipient_id']):
        raise NotFoundError('Recipient not found')

    message = messages.create(
        sender_id=forced['sender_id'],
        recipient_id=data['recipient_id'],
        message=data['message'],
        subject=data.get('subject'),
    )
    return success(message, 'Message sent successfully', 201)


@message_bp.route('/inbox', methods=['GET'])
@caller_required
def inbox(caller):
    """
    Messages received by the caller, newest first
    Query params: page or offset, limit, unread_only
    """
    forced = enforce(caller, 'message', LIST)
    return paginated(messages.inbox(_mailbox_options().with_forced(forced)))


@message_bp.route('/outbox', methods=['GET'])
@caller_required
def outbox(caller):
    """Messages sent by the caller, newest first"""
    forced = enforce(caller, 'message', LIST)
    return paginated(messages.outbox(_mailbox_options().with_forced(forced)))


@message_bp.route('/<int:message_id>', methods=['GET'])
@caller_required
def get_message(caller, message_id):
    message = _get_or_404(message_id)
    enforce(caller, 'message', READ, _hint(message))
    return success(message)


@message_bp.route('/<int:message_id>/read', methods=['PUT'])
@caller_required
def mark_as_read(caller, message_id):
    message = _get_or_404(message_id)
    enforce(caller, 'message', UPDATE, _hint(message))
    return success(messages.mark_as_read(message_id), 'Message marked as read')


@message_bp.route('/<int:message_id>', methods=['DELETE'])
@caller_required
def delete_message(caller, message_id):
    message = _get_or_404(message_id)
    enforce(caller, 'message', DELETE, _hint(message))
    messages.delete(message_id)
    return success(message='Message deleted successfully')
