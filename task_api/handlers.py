import base64
import json
import logging
import time
import uuid
from decimal import Decimal
from functools import wraps

from .schemas import CREATE_TASK, DEFAULT_STATUS, UPDATE_TASK
from .store import TaskStore
from .validation import validate

log = logging.getLogger(__name__)

FAILURE_MESSAGES = {
    "create": lambda event: "Error encountered creating new task: %s" % event.get("body"),
    "update": lambda event: "Error encountered updating task: %s" % event.get("body"),
    "get_all": lambda event: "Error encountered retrieving all tasks",
    "get_by_id": lambda event: "Error encountered retrieving task by id: %s" % _path_id(event),
    "delete": lambda event: "Error encountered deleting task by id: %s" % _path_id(event),
}


def _json_default(value):
    # DynamoDB hands numbers back as Decimal
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return str(value)


def _resp(status, payload):
    return {
        "headers": {"Content-Type": "application/json"},
        "statusCode": status,
        "body": json.dumps(payload, default=_json_default),
    }


def message_response(status, message):
    return _resp(status, {"message": message})


def failure(name, event):
    return message_response(500, FAILURE_MESSAGES[name](event))


def _body_text(event):
    body = event.get("body")
    if body is None:
        return None
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return body


def _loads(text):
    # floats are not writable to DynamoDB
    return json.loads(text, parse_float=Decimal)


def _path_id(event):
    return (event.get("pathParameters") or {}).get("id")


def _now_ms():
    return int(time.time() * 1000)


def guarded(name):
    """Turn any exception escaping the handler into its 500 response."""
    def decorator(func):
        @wraps(func)
        def wrapper(self, event):
            try:
                return func(self, event)
            except Exception:
                log.exception("%s handler failed", name)
                return failure(name, event)
        return wrapper
    return decorator


class TaskHandlers:
    def __init__(self, store, strict_updates=False):
        self.store = store
        self.strict_updates = strict_updates

    @classmethod
    def from_settings(cls, settings):
        return cls(TaskStore.from_settings(settings), strict_updates=settings.strict_updates)

    # -------- POST /tasks --------
    @guarded("create")
    def create(self, event):
        body = _body_text(event)
        if not body:
            return message_response(400, "Missing payload")

        data, errors = validate(CREATE_TASK, _loads(body))
        if errors:
            return message_response(400, "Validation Error: %s" % ", ".join(errors))
        data.setdefault("status", DEFAULT_STATUS.value)

        timestamp = _now_ms()
        task_id = str(uuid.uuid4())
        self.store.put({**data, "id": task_id, "createdAt": timestamp, "updatedAt": timestamp})
        log.info("created task %s", task_id)
        return message_response(200, "Successfully saved new task: %s" % task_id)

    # -------- PUT /tasks/{id} --------
    @guarded("update")
    def update(self, event):
        body = _body_text(event)
        if not body:
            return message_response(400, "Missing payload")
        task_id = _path_id(event)
        if not task_id:
            return message_response(400, "Missing id from path parameter")
        if not body.strip():
            return message_response(400, "Invalid payload for update task.")

        existing = self.store.find(task_id)
        if not existing:
            log.info("update target %s not found", task_id)
            return message_response(400, "No record matched for invalid ID: %s" % task_id)

        data = _loads(body)
        if not isinstance(data, dict):
            return message_response(400, "Invalid payload for update task.")
        if self.strict_updates:
            return self._apply_update(task_id, existing, data)

        # replace semantics: the payload becomes the record (last write wins)
        self.store.put({**data, "updatedAt": _now_ms()})
        return message_response(200, "Successfully updated task: %s" % data.get("id"))

    def _apply_update(self, task_id, existing, payload):
        if payload.get("id") not in (None, task_id):
            return message_response(400, "Path id and payload id do not match")
        fields, errors = validate(UPDATE_TASK, payload)
        if errors:
            return message_response(400, "Validation Error: %s" % ", ".join(errors))

        item = {**existing, **fields, "updatedAt": _now_ms()}
        self.store.put(item)
        return message_response(200, "Successfully updated task: %s" % task_id)

    # -------- GET /tasks --------
    @guarded("get_all")
    def get_all(self, event):
        return _resp(200, self.store.scan())

    # -------- GET /tasks/{id} --------
    @guarded("get_by_id")
    def get_by_id(self, event):
        task_id = _path_id(event)
        if not task_id:
            return message_response(400, "Missing id from path parameter")
        # not found is an empty result, not a 404
        return _resp(200, self.store.get(task_id))

    # -------- DELETE /tasks/{id} --------
    @guarded("delete")
    def delete(self, event):
        task_id = _path_id(event)
        if not task_id:
            return message_response(400, "Missing id from path parameter")
        self.store.delete(task_id)
        return message_response(200, "Successfully deleted task: %s" % task_id)
