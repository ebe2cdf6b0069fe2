from portal.extensions import db, bcrypt
from .base import TimestampMixin

ROLES = ('patient', 'doctor', 'admin')


class User(db.Model, TimestampMixin):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)  # bcrypt digest, never plaintext

    # Role - one of 'patient', 'doctor', 'admin'
    role = db.Column(db.String(20), nullable=False, index=True)

    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)

    # Status (soft delete flips is_active)
    is_verified = db.Column(db.Boolean, default=False, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    def set_password(self, password):
        """Hash and set password"""
        self.password = bcrypt.generate_password_hash(password).decode('utf-8')

    def __repr__(self):
        return f"<User {self.email} - {self.role}>"
