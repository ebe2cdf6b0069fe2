#!/usr/bin/env python3
"""
Create the default admin account for a fresh portal database.
Run with: python init_admin.py  (after `flask db upgrade`)

ADMIN_EMAIL / ADMIN_PASSWORD override the defaults below.
"""
import os

from portal import create_app
from portal.repositories import users

DEFAULT_ADMIN = {
    'email': os.getenv('ADMIN_EMAIL', 'admin@portal.local'),
    'password': os.getenv('ADMIN_PASSWORD', 'admin12345'),
    'first_name': 'Portal',
    'last_name': 'Admin',
}


def create_admin(app=None):
    """Create the admin user unless the email is already registered; returns True if created"""
    app = app or create_app()

    with app.app_context():
        print("=" * 60)
        print("Initializing Admin User")
        print("=" * 60)

        if users.email_exists(DEFAULT_ADMIN['email']):
            print(f"  - Admin '{DEFAULT_ADMIN['email']}' already exists (skipping)")
            return False

        admin = users.create(role='admin', **DEFAULT_ADMIN)
        print(f"  ✓ Created: {admin['email']} (admin) - id {admin['id']}")
        print("\n⚠️  IMPORTANT: Change the password after first login!")
        return True


if __name__ == '__main__':
    create_admin()
