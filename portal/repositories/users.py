from portal.extensions import db
from portal.models import User
from portal.query import SelectQuery, build_lookup_query
from portal.query.resources import USERS

from .base import Repository


class UserRepository(Repository):
    spec = USERS
    table = 'users'

    def create(self, email, password, role, first_name, last_name):
        user = User(email=email, role=role, first_name=first_name, last_name=last_name)
        user.set_password(password)
        key = self.insert(user, 'registering')
        return self.find_by_id(key)

    def find_by_email(self, email):
        """Credential row for login, digest included. Exact, case-sensitive match."""
        query = SelectQuery(
            'u.id, u.email, u.password, u.role, u.first_name, u.last_name, '
            'u.is_verified, u.is_active, u.created_at',
            'users u',
        ).where('u.email = {0}', email)
        return self.fetch_one(query.select(), 'finding')

    def find_active(self, key):
        """The user behind a token; deactivated users resolve to None."""
        query = build_lookup_query(self.spec, key)
        query.predicates.append('u.is_active = TRUE')
        return self.fetch_one(query.select(), 'finding')

    def email_exists(self, email):
        statement = SelectQuery('COUNT(*) AS total', 'users u').where('u.email = {0}', email).select()
        with self._store('checking'):
            total = db.session.execute(statement.clause(), statement.params).scalar_one()
        return int(total) > 0
