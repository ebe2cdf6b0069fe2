from sqlalchemy import Boolean

from portal.models import Message
from portal.query import build_list_query, build_update
from portal.query.resources import INBOX, OUTBOX

from .base import Repository


class MessageRepository(Repository):
    spec = INBOX
    table = 'messages'
    mutable = {'is_read': Boolean()}

    def create(self, sender_id, recipient_id, message, subject=None):
        row = Message(sender_id=sender_id, recipient_id=recipient_id, subject=subject, message=message)
        return self.find_by_id(self.insert(row, 'sending'))

    def inbox(self, options):
        return self.fetch_page(build_list_query(INBOX, options), options, 'listing inbox')

    def outbox(self, options):
        return self.fetch_page(build_list_query(OUTBOX, options), options, 'listing outbox')

    def mark_as_read(self, key):
        # messages carry no updated_at column
        self.write(build_update(self.table, {'is_read': True}, self.mutable, key, touch=False), 'marking')
        return self.find_by_id(key)
