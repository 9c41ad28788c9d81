"""Table-level query/mutation interface over MongoDB.

Every call is scoped to the signed-in user taken from the auth session, so a
view can never read or touch another user's rows. Rows go in and come out as
plain dicts with an ``id`` key; the Mongo ``_id`` never leaves this module.
"""
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.auth import AuthClient
from core.constants import FOREIGN_KEYS
from core.errors import AuthError, BackendError
from core.time_utils import utc_now_naive

logger = logging.getLogger(__name__)

Order = Union[str, Sequence[Tuple[str, int]]]
# alias -> (parent table, local column, parent columns)
Embed = Dict[str, Tuple[str, str, Sequence[str]]]

PROTECTED = {"id", "_id", "user_id", "created_at"}

def _out(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    row = dict(doc)
    row["id"] = row.pop("_id")
    return row

def _sort_spec(order: Optional[Order]) -> List[Tuple[str, int]]:
    if not order:
        return []
    if isinstance(order, str):
        # "-field" sorts descending
        return [(order.lstrip("-"), DESCENDING if order.startswith("-") else ASCENDING)]
    return [(f, DESCENDING if d < 0 else ASCENDING) for f, d in order]

@contextmanager
def _wrap(op: str, table: str):
    try:
        yield
    except BackendError:
        raise
    except DuplicateKeyError as e:
        logger.error("%s on %s hit a unique constraint: %s", op, table, e)
        raise BackendError(f'duplicate key value violates unique constraint on "{table}"', code="23505") from e
    except PyMongoError as e:
        logger.error("%s on %s failed: %s", op, table, e)
        raise BackendError(str(e)) from e


class Backend:
    def __init__(self, db: Database, auth: AuthClient):
        self.db = db
        self.auth = auth

    def _uid(self) -> str:
        user = self.auth.get_user()
        if not user:
            raise AuthError("Auth session missing!", code="session_missing")
        return user["id"]

    def _scoped(self, uid: str, filters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        q = dict(filters or {})
        if "id" in q:
            q["_id"] = q.pop("id")
        q["user_id"] = uid
        return q

    # ---- queries -----------------------------------------------------------

    def select(self, table: str, filters: Optional[Dict[str, Any]] = None,
               order: Optional[Order] = None, limit: Optional[int] = None,
               embed: Optional[Embed] = None) -> List[Dict[str, Any]]:
        uid = self._uid()
        with _wrap("select", table):
            cur = self.db[table].find(self._scoped(uid, filters))
            sort = _sort_spec(order)
            if sort:
                cur = cur.sort(sort)
            if limit:
                cur = cur.limit(int(limit))
            rows = [_out(d) for d in cur]
            for alias, (parent, column, fields) in (embed or {}).items():
                self._embed(uid, rows, alias, parent, column, fields)
        return rows

    def select_one(self, table: str, filters: Optional[Dict[str, Any]] = None,
                   order: Optional[Order] = None) -> Optional[Dict[str, Any]]:
        """First matching row, or None when nothing matches."""
        rows = self.select(table, filters, order=order, limit=1)
        return rows[0] if rows else None

    def _embed(self, uid: str, rows: List[Dict[str, Any]], alias: str,
               parent: str, column: str, fields: Iterable[str]):
        ids = sorted({r.get(column) for r in rows if r.get(column)})
        proj = {f: 1 for f in fields}
        found = {d["_id"]: d for d in self.db[parent].find({"_id": {"$in": ids}, "user_id": uid}, proj)}
        for r in rows:
            doc = found.get(r.get(column))
            r[alias] = {f: doc.get(f) for f in fields} if doc else None

    # ---- mutations ---------------------------------------------------------

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        uid = self._uid()
        doc = {k: v for k, v in row.items() if k not in PROTECTED}
        self._check_references(uid, table, doc)
        doc.update({"_id": uuid.uuid4().hex, "user_id": uid, "created_at": utc_now_naive()})
        with _wrap("insert", table):
            self.db[table].insert_one(doc)
        logger.info("inserted %s row %s", table, doc["_id"])
        return _out(doc)

    def update(self, table: str, row_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        uid = self._uid()
        changes = {k: v for k, v in changes.items() if k not in PROTECTED}
        self._check_references(uid, table, changes)
        with _wrap("update", table):
            doc = self.db[table].find_one_and_update(
                {"_id": row_id, "user_id": uid},
                {"$set": changes} if changes else {"$set": {"user_id": uid}},
                return_document=ReturnDocument.AFTER,
            )
        if doc is None:
            raise BackendError(f'No row "{row_id}" found in "{table}"', code="not_found")
        logger.info("updated %s row %s", table, row_id)
        return _out(doc)

    def delete(self, table: str, row_id: str) -> None:
        uid = self._uid()
        for (child, column), parent in FOREIGN_KEYS.items():
            if parent != table:
                continue
            with _wrap("delete", table):
                refs = self.db[child].count_documents({"user_id": uid, column: row_id}, limit=1)
            if refs:
                raise BackendError(
                    f'Cannot delete from "{table}": rows in "{child}" still reference it',
                    code="23503",
                )
        with _wrap("delete", table):
            res = self.db[table].delete_one({"_id": row_id, "user_id": uid})
        if res.deleted_count == 0:
            raise BackendError(f'No row "{row_id}" found in "{table}"', code="not_found")
        logger.info("deleted %s row %s", table, row_id)

    def upsert(self, table: str, row: Dict[str, Any], on_conflict: Sequence[str]) -> Dict[str, Any]:
        """Insert, or overwrite the row sharing the ``on_conflict`` columns."""
        uid = self._uid()
        key = {c: row[c] for c in on_conflict}
        key["user_id"] = uid
        fields = {k: v for k, v in row.items() if k not in PROTECTED and k not in key}
        self._check_references(uid, table, fields)
        now = utc_now_naive()
        with _wrap("upsert", table):
            self.db[table].update_one(
                key,
                {"$setOnInsert": {"_id": uuid.uuid4().hex, "created_at": now},
                 "$set": fields},
                upsert=True,
            )
            doc = self.db[table].find_one(key)
        logger.info("upserted %s row for %s", table, {c: row[c] for c in on_conflict})
        return _out(doc)

    def _check_references(self, uid: str, table: str, doc: Dict[str, Any]):
        for (child, column), parent in FOREIGN_KEYS.items():
            if child != table or column not in doc:
                continue
            with _wrap("reference check", table):
                ok = self.db[parent].count_documents({"_id": doc[column], "user_id": uid}, limit=1)
            if not ok:
                raise BackendError(
                    f'insert or update on table "{table}" violates foreign key constraint on "{column}"',
                    code="23503",
                )
