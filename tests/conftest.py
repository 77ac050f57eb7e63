import json

import pytest
from botocore.exceptions import ClientError

from task_api.handlers import TaskHandlers
from task_api.store import TaskStore


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB Table keyed by ``id``."""

    def __init__(self, page_size=None):
        self.items = {}
        self.page_size = page_size

    def put_item(self, Item):
        if "id" not in Item:
            raise ClientError(
                {"Error": {"Code": "ValidationException",
                           "Message": "One of the required keys was not given a value"}},
                "PutItem",
            )
        self.items[Item["id"]] = dict(Item)
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def get_item(self, Key):
        resp = {"ResponseMetadata": {"HTTPStatusCode": 200}}
        if Key["id"] in self.items:
            resp["Item"] = dict(self.items[Key["id"]])
        return resp

    def scan(self, ExclusiveStartKey=None):
        keys = list(self.items)
        start = keys.index(ExclusiveStartKey["id"]) + 1 if ExclusiveStartKey else 0
        end = len(keys) if self.page_size is None else start + self.page_size
        resp = {"Items": [dict(self.items[k]) for k in keys[start:end]]}
        if end < len(keys):
            resp["LastEvaluatedKey"] = {"id": keys[end - 1]}
        return resp

    def delete_item(self, Key):
        self.items.pop(Key["id"], None)
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}


@pytest.fixture
def table():
    return FakeTable()


@pytest.fixture
def handlers(table):
    return TaskHandlers(TaskStore(table))


@pytest.fixture
def strict_handlers(table):
    return TaskHandlers(TaskStore(table), strict_updates=True)


def event(body=None, path_id=None, **extra):
    ev = {"body": body, "pathParameters": {"id": path_id} if path_id is not None else None}
    ev.update(extra)
    return ev


def body_of(resp):
    return json.loads(resp["body"])


def created_id(resp):
    return body_of(resp)["message"].rsplit(": ", 1)[1]
