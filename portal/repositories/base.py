"""
Store executor shared by every repository.

Statements come from portal.query; this layer only runs them, shapes rows
into plain dicts and turns driver failures into tagged errors carrying the
resource and operation that failed.
"""
import logging
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError, TimeoutError as PoolTimeout

from portal.errors import ConflictError, PortalError, StoreError, StoreUnavailableError
from portal.extensions import db
from portal.query import Page, build_delete, build_list_query, build_lookup_query, build_update

logger = logging.getLogger(__name__)


def _plain(value):
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


class Repository:
    spec = None
    table = None
    mutable = {}

    @property
    def resource(self):
        return self.spec.name

    @contextmanager
    def _store(self, operation):
        try:
            yield
        except PortalError:
            raise
        except IntegrityError as e:
            db.session.rollback()
            logger.warning("Integrity error while %s %s: %s", operation, self.resource, e.orig)
            raise ConflictError(f'{self.resource.capitalize()} conflicts with existing data')
        except (PoolTimeout, OperationalError) as e:
            db.session.rollback()
            logger.error("Store unavailable while %s %s: %s", operation, self.resource, e)
            raise StoreUnavailableError(resource=self.resource, operation=operation, detail=str(e))
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Store error while %s %s: %s", operation, self.resource, e, exc_info=True)
            raise StoreError(
                f'Error {operation} {self.resource}',
                resource=self.resource,
                operation=operation,
                detail=str(e),
            )

    def _row(self, row):
        data = {key: _plain(value) for key, value in row._mapping.items()}
        for column, cast in self.spec.casts.items():
            if data.get(column) is not None:
                data[column] = cast(data[column])
        return data

    def fetch_one(self, statement, operation):
        with self._store(operation):
            row = db.session.execute(statement.clause(), statement.params).first()
        return self._row(row) if row is not None else None

    def fetch_all(self, statement, operation):
        with self._store(operation):
            rows = db.session.execute(statement.clause(), statement.params).all()
        return [self._row(row) for row in rows]

    def fetch_page(self, query, options, operation):
        """Rows for one page plus the exact total under the same predicates."""
        count = query.count()
        with self._store(operation):
            total = db.session.execute(count.clause(), count.params).scalar_one()
        items = self.fetch_all(query.page(options.limit, options.offset), operation)
        return Page(items=items, total=int(total), limit=options.limit, offset=options.offset)

    def write(self, statement, operation):
        """Run a mutating statement and commit; returns the affected row count."""
        with self._store(operation):
            result = db.session.execute(statement.clause(), statement.params)
            affected = result.rowcount
            db.session.commit()
        return affected

    def insert(self, instance, operation='creating'):
        with self._store(operation):
            db.session.add(instance)
            db.session.flush()
            key = instance.id
            db.session.commit()
        logger.info("Created %s %s", self.resource, key)
        return key

    def find_by_id(self, key):
        return self.fetch_one(build_lookup_query(self.spec, key).select(), 'finding')

    def find_all(self, options):
        return self.fetch_page(build_list_query(self.spec, options), options, 'listing')

    def update(self, key, patch):
        statement = build_update(self.table, patch, self.mutable, key)
        if not self.write(statement, 'updating'):
            return None
        return self.find_by_id(key)

    def delete(self, key):
        """Hard delete; returns the removed row or None."""
        existing = self.find_by_id(key)
        if existing is None:
            return None
        self.write(build_delete(self.table, key), 'deleting')
        return existing

    def find_by_owner(self, column, owner_id, options):
        """List rows whose ``column`` equals ``owner_id``; forced filters still win."""
        narrowed = replace(options, filters={**options.filters, column: owner_id})
        return self.find_all(narrowed)
