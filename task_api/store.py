import logging

import boto3
from botocore.config import Config

log = logging.getLogger(__name__)

# reuse across warm invocations, keyed by (region, endpoint)
_resources = {}


def _dynamodb(region=None, endpoint_url=None):
    key = (region, endpoint_url)
    if key not in _resources:
        kwargs = {"config": Config(retries={"max_attempts": 3, "mode": "standard"})}
        if region:
            kwargs["region_name"] = region
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        _resources[key] = boto3.resource("dynamodb", **kwargs)
    return _resources[key]


class TaskStore:
    """Single-table access keyed by ``id``."""

    def __init__(self, table):
        self._table = table

    @classmethod
    def from_settings(cls, settings):
        resource = _dynamodb(settings.region, settings.endpoint_url)
        return cls(resource.Table(settings.table_name))

    def put(self, item):
        self._table.put_item(Item=item)

    def get(self, task_id):
        # raw lookup result: {"Item": {...}} when found, {} otherwise
        resp = self._table.get_item(Key={"id": task_id})
        return {k: v for k, v in resp.items() if k != "ResponseMetadata"}

    def find(self, task_id):
        return self.get(task_id).get("Item")

    def scan(self):
        items = []
        scan_args = {}
        while True:
            resp = self._table.scan(**scan_args)
            items.extend(resp.get("Items", []))
            lek = resp.get("LastEvaluatedKey")
            if not lek:
                break
            scan_args["ExclusiveStartKey"] = lek
        log.debug("scanned %d items", len(items))
        return items

    def delete(self, task_id):
        self._table.delete_item(Key={"id": task_id})
