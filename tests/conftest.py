import io
from datetime import date, datetime, timezone

import pytest

from sophia_recruit.database import Database
from sophia_recruit.models import Applicant, ApplicationStatus


class FakeError(Exception):
    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class FakeResponse:
    def __init__(self, data=None, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, table):
        self.table = table
        self.action = None
        self.payload = None
        self.filters = []
        self.ordering = None

    def select(self, *args, **kwargs):
        self.action = 'select'
        return self

    def insert(self, rows):
        self.action = 'insert'
        self.payload = rows
        return self

    def update(self, values):
        self.action = 'update'
        self.payload = values
        return self

    def delete(self):
        self.action = 'delete'
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, n):
        return self

    def execute(self):
        return self.table.run(self)


class FakeTable:
    def __init__(self):
        self.rows = []
        self.errors = {}
        self.calls = []

    def run(self, query):
        self.calls.append((query.action, query.payload, list(query.filters)))
        if query.action in self.errors:
            raise self.errors[query.action]

        def matches(row):
            return all(row.get(col) == val for col, val in query.filters)

        if query.action == 'select':
            rows = [dict(r) for r in self.rows if matches(r)]
            if query.ordering:
                column, desc = query.ordering
                rows.sort(key=lambda r: r[column], reverse=desc)
            return FakeResponse(rows, len(rows))
        if query.action == 'insert':
            for row in query.payload:
                stored = dict(row)
                stored.setdefault('created_at', datetime.now(timezone.utc).isoformat())
                self.rows.append(stored)
            return FakeResponse(query.payload)
        if query.action == 'update':
            for row in self.rows:
                if matches(row):
                    row.update(query.payload)
            return FakeResponse([])
        if query.action == 'delete':
            self.rows = [r for r in self.rows if not matches(r)]
            return FakeResponse([])
        raise AssertionError(f"unexpected action {query.action}")


class FakeBucket:
    def __init__(self, name, storage):
        self.name = name
        self.storage = storage

    def upload(self, path, file, file_options=None):
        if self.storage.upload_error is not None:
            raise self.storage.upload_error
        self.storage.objects[path] = file
        return {'Key': f"{self.name}/{path}"}

    def get_public_url(self, path):
        return f"https://example.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.objects = {}
        self.upload_error = None

    def from_(self, name):
        return FakeBucket(name, self)


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.storage = FakeStorage()

    def table(self, name):
        return FakeQuery(self.tables.setdefault(name, FakeTable()))

    @property
    def applicants(self):
        return self.tables.setdefault('applicants', FakeTable())


class UnreadableFile(io.BytesIO):
    def read(self, *args):
        raise OSError("disk gone")


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def database(supabase):
    return Database(client=supabase)


def make_row(id, first_name, last_name, position, status='NEW', created_at='2026-01-10T09:00:00+00:00', **extra):
    row = {
        'id': id,
        'first_name': first_name,
        'last_name': last_name,
        'email': f"{first_name.lower()}@exemple.com",
        'phone': '06 12 34 56 78',
        'position': position,
        'start_date': '2026-05-01',
        'end_date': '2026-09-30',
        'notes': '',
        'cv_file_name': None,
        'cv_file_path': None,
        'status': status,
        'created_at': created_at,
    }
    row.update(extra)
    return row


def make_applicant(id='a1', first_name='Jean', last_name='Dupont', position='Serveur',
                   status=ApplicationStatus.NEW, **extra):
    fields = dict(
        id=id,
        first_name=first_name,
        last_name=last_name,
        email='jean.dupont@exemple.com',
        phone='06 12 34 56 78',
        position=position,
        start_date=date(2026, 5, 1),
        end_date=date(2026, 9, 30),
        notes='',
        submitted_at=datetime(2026, 1, 10, 9, 0, tzinfo=timezone.utc),
        status=status,
    )
    fields.update(extra)
    return Applicant(**fields)
