# /scholar_track/services/local_platform.py

"""
A local, SQLAlchemy-backed implementation of the platform boundary.

It honours the same record contract as the hosted platform (field lists,
lookups, per-record batch results, version tokens), so the entity API
modules run unchanged against it during development and in tests. A
configurable `latency` is awaited at the start of every call to reproduce
cooperative interleavings of concurrent requests.

Session work is blocking, so it is handed to a worker thread with
`asyncio.to_thread`. Calls are serialized by a lock: SQLite connections
are not safe to share between threads at the same time.
"""

import asyncio
import threading
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..app_logger import get_logger
from ..db.database import SessionLocal
from ..db.models.record_models import PlatformRecord
from ..models.platform_model import (
    FetchResponse, FieldError, FunctionResponse, MutationResponse,
    RecordResponse, RecordResult,
)
from .platform_client import PlatformClient, PlatformError, parse_response
from .platform_helpers import record_query
from .platform_schema import (
    CONFLICT_CODE, LOOKUP_FIELDS, NOT_FOUND_CODE, TABLE_FIELDS,
    VERSION_FIELD, VERSIONED_TABLES,
)

logger = get_logger("local_platform")

FunctionHandler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]
T = TypeVar("T")


def _record_id(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class LocalPlatformClient(PlatformClient):
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal, latency: float = 0.0):
        self._session_factory = session_factory
        self.latency = latency
        self._functions: Dict[str, FunctionHandler] = {}
        self._storage_lock = threading.Lock()

    # --- Infrastructure ---

    async def _pause(self) -> None:
        await asyncio.sleep(self.latency)

    def _serialized(self, work: Callable[..., T], *args: Any) -> T:
        with self._storage_lock:
            return work(*args)

    async def _run_storage(self, work: Callable[..., T], *args: Any) -> T:
        """Runs blocking session work in a worker thread, one call at a time."""
        return await asyncio.to_thread(self._serialized, work, *args)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Local platform storage error")
            raise PlatformError(f"Local platform storage error: {e}") from e
        finally:
            session.close()

    def register_function(self, name: str, handler: FunctionHandler) -> None:
        """Registers an in-process stand-in for a serverless function."""
        self._functions[name] = handler

    @staticmethod
    def _as_record(row: PlatformRecord) -> Dict[str, Any]:
        return {**(row.data or {}), "Id": row.id}

    def _resolve_lookups(self, session: Session, table_name: str, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Replaces lookup ids with {"Id", "Name"} objects, as the hosted platform does."""
        lookups = LOOKUP_FIELDS.get(table_name, {})
        if not lookups or not records:
            return records

        wanted = {
            _record_id(r.get(field)) for r in records for field in lookups if r.get(field) is not None
        }
        wanted.discard(None)
        names: Dict[int, Dict[str, Any]] = {}
        if wanted:
            rows = session.query(PlatformRecord).filter(PlatformRecord.id.in_(wanted)).all()
            names = {row.id: {"table": row.table_name, "Name": (row.data or {}).get("Name")} for row in rows}

        resolved = []
        for record in records:
            record = dict(record)
            for field, target_table in lookups.items():
                target_id = _record_id(record.get(field))
                target = names.get(target_id)
                if target and target["table"] == target_table:
                    record[field] = {"Id": target_id, "Name": target["Name"]}
            resolved.append(record)
        return resolved

    def _unknown_fields(self, table_name: str, payload: Dict[str, Any]) -> List[FieldError]:
        allowed = set(TABLE_FIELDS[table_name]) | {"Id"}
        return [
            FieldError(fieldLabel=key, message="Field does not exist on this table")
            for key in payload if key not in allowed
        ]

    # --- Seeding (development and tests) ---

    def seed(self, table_name: str, records: List[Dict[str, Any]]) -> List[int]:
        """Inserts records directly, honouring an explicit "Id" when given."""
        created_ids = []
        with self._session() as session:
            for record in records:
                data = {k: v for k, v in record.items() if k != "Id"}
                if table_name in VERSIONED_TABLES:
                    data.setdefault(VERSION_FIELD, 1)
                row = PlatformRecord(table_name=table_name, data=data)
                if record.get("Id") is not None:
                    row.id = int(record["Id"])
                session.add(row)
                session.flush()
                created_ids.append(row.id)
            session.commit()
        return created_ids

    # --- Storage work (runs in a worker thread) ---

    def _fetch_records(self, table_name: str, params: Dict[str, Any]) -> FetchResponse:
        if table_name not in TABLE_FIELDS:
            return FetchResponse(success=False, message=f"Table {table_name} does not exist", data=[])

        with self._session() as session:
            rows = session.query(PlatformRecord).filter(PlatformRecord.table_name == table_name).all()
            records = [self._as_record(row) for row in rows]
            try:
                matched = record_query.filter_records(records, params)
                ordered = record_query.sort_records(matched, params.get("orderBy"))
                page = record_query.page_records(ordered, params.get("pagingInfo"))
            except ValueError as e:
                return FetchResponse(success=False, message=str(e), data=[])

            field_names = record_query.requested_fields(params)
            page = [record_query.project_record(r, field_names) for r in page]
            data = self._resolve_lookups(session, table_name, page)

        return FetchResponse(success=True, data=data, total=len(matched))

    def _get_record_by_id(self, table_name: str, record_id: int, params: Dict[str, Any]) -> RecordResponse:
        if table_name not in TABLE_FIELDS:
            return RecordResponse(success=False, message=f"Table {table_name} does not exist")

        with self._session() as session:
            row = session.get(PlatformRecord, record_id)
            if row is None or row.table_name != table_name:
                return RecordResponse(success=True, data=None)
            record = record_query.project_record(self._as_record(row), record_query.requested_fields(params))
            data = self._resolve_lookups(session, table_name, [record])[0]
        return RecordResponse(success=True, data=data)

    def _create_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse:
        if table_name not in TABLE_FIELDS:
            return MutationResponse(success=False, message=f"Table {table_name} does not exist")

        results: List[RecordResult] = []
        with self._session() as session:
            for payload in params.get("records") or []:
                errors = self._unknown_fields(table_name, payload)
                if errors:
                    results.append(RecordResult(success=False, errors=errors, message="Record has invalid fields"))
                    continue

                data = {k: v for k, v in payload.items() if k != "Id"}
                if table_name in VERSIONED_TABLES:
                    data[VERSION_FIELD] = 1
                row = PlatformRecord(table_name=table_name, data=data)
                session.add(row)
                session.flush()
                created = self._resolve_lookups(session, table_name, [self._as_record(row)])[0]
                results.append(RecordResult(success=True, data=created))
            session.commit()

        return MutationResponse(success=True, results=results)

    def _update_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse:
        if table_name not in TABLE_FIELDS:
            return MutationResponse(success=False, message=f"Table {table_name} does not exist")

        results: List[RecordResult] = []
        with self._session() as session:
            for payload in params.get("records") or []:
                record_id = _record_id(payload.get("Id"))
                row = session.get(PlatformRecord, record_id) if record_id is not None else None
                if row is None or row.table_name != table_name:
                    results.append(RecordResult(success=False, message="Record not found", code=NOT_FOUND_CODE))
                    continue

                errors = self._unknown_fields(table_name, payload)
                if errors:
                    results.append(RecordResult(success=False, errors=errors, message="Record has invalid fields"))
                    continue

                changes = {k: v for k, v in payload.items() if k != "Id"}
                if table_name in VERSIONED_TABLES:
                    stored_version = int((row.data or {}).get(VERSION_FIELD) or 1)
                    sent_version = changes.pop(VERSION_FIELD, None)
                    if sent_version is not None and _record_id(sent_version) != stored_version:
                        results.append(RecordResult(
                            success=False,
                            code=CONFLICT_CODE,
                            message="Record was modified by another request",
                            errors=[FieldError(fieldLabel=VERSION_FIELD, message=f"Stale version {sent_version}, current is {stored_version}")],
                        ))
                        continue
                    changes[VERSION_FIELD] = stored_version + 1

                # Assign a new dict so the JSON column registers the change.
                row.data = {**(row.data or {}), **changes}
                session.flush()
                updated = self._resolve_lookups(session, table_name, [self._as_record(row)])[0]
                results.append(RecordResult(success=True, data=updated))
            session.commit()

        return MutationResponse(success=True, results=results)

    def _delete_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse:
        if table_name not in TABLE_FIELDS:
            return MutationResponse(success=False, message=f"Table {table_name} does not exist")

        results: List[RecordResult] = []
        with self._session() as session:
            for raw_id in params.get("RecordIds") or []:
                record_id = _record_id(raw_id)
                row = session.get(PlatformRecord, record_id) if record_id is not None else None
                if row is None or row.table_name != table_name:
                    results.append(RecordResult(success=False, message="Record not found", code=NOT_FOUND_CODE))
                    continue
                session.delete(row)
                results.append(RecordResult(success=True))
            session.commit()

        return MutationResponse(success=True, results=results)

    # --- Platform boundary ---

    async def fetch_records(self, table_name: str, params: Dict[str, Any]) -> FetchResponse:
        await self._pause()
        return await self._run_storage(self._fetch_records, table_name, params)

    async def get_record_by_id(self, table_name: str, record_id: int, params: Dict[str, Any]) -> RecordResponse:
        await self._pause()
        return await self._run_storage(self._get_record_by_id, table_name, record_id, params)

    async def create_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse:
        await self._pause()
        return await self._run_storage(self._create_record, table_name, params)

    async def update_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse:
        await self._pause()
        return await self._run_storage(self._update_record, table_name, params)

    async def delete_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse:
        await self._pause()
        return await self._run_storage(self._delete_record, table_name, params)

    async def invoke_function(self, name: str, body: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> FunctionResponse:
        await self._pause()
        handler = self._functions.get(name)
        if handler is None:
            return FunctionResponse(success=False, message=f"Function {name} is not deployed")
        return parse_response(FunctionResponse, await handler(body))
