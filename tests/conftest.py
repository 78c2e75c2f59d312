"""
Shared fixtures

Services are exercised against an in-memory stand-in for the low-level boto3
DynamoDB client. It understands exactly the request shapes the services send:
get/put/delete by key, paginated scan, and paginated query on the table or a
global secondary index with an equality or begins_with key condition and an
equality filter.
"""
import os
import re
import copy
import threading

os.environ.setdefault("AWS_REGION", "eu-central-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-central-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "spot-finder-test")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "SpotFinderTest")

import pytest
from botocore.exceptions import ClientError

from config.constants import CONTINENT_COUNTRY_INDEX, CONTINENT_GEOHASH_INDEX
from models.favorite import Favorite
from models.spot import Spot
from models.user import User
from services.favorite_service import FavoriteService
from services.persistence_service import PersistenceService
from services.spot_service import SpotService
from services.user_service import UserService
from utils.dynamodb_helpers import dynamodb_to_python


SPOTS_TABLE = "spots-test"
USERS_TABLE = "users-test"
FAVORITES_TABLE = "favorites-test"

KEY_CONDITION = re.compile(
    r"^#pk = :pk(?: AND (?:(?P<begins>begins_with\(#sk, :sk\))|(?P<equals>#sk = :sk)))?$"
)
FILTER_CLAUSE = re.compile(r"^(#\w+) = (:\w+)$")


class FakeDynamoDBClient:
    """In-memory DynamoDB client supporting the calls made by PersistenceService"""

    def __init__(self, scan_page_size: int = 2):
        self.scan_page_size = scan_page_size
        self.schemas = {}
        self.indexes = {}
        self.tables = {}
        self.lock = threading.Lock()
        self.calls = []

    def create_table(self, name, key_schema, indexes=()):
        self.schemas[name] = key_schema
        self.tables[name] = {}
        for index in indexes:
            self.indexes[(name, index.name)] = index.key_schema

    def _record(self, operation, params):
        with self.lock:
            self.calls.append((operation, params))

    def calls_to(self, operation):
        return [params for op, params in self.calls if op == operation]

    def _table(self, name, operation):
        if name not in self.tables:
            raise ClientError(
                {"Error": {"Code": "ResourceNotFoundException", "Message": f"Table {name} not found"}},
                operation,
            )
        return self.tables[name]

    def _primary_key(self, table_name, attributes):
        schema = self.schemas[table_name]
        names = [schema.hash_key] + ([schema.range_key] if schema.range_key else [])
        try:
            return tuple(dynamodb_to_python(attributes[name]) for name in names)
        except KeyError:
            raise ClientError(
                {"Error": {"Code": "ValidationException", "Message": "Missing key attribute"}},
                "PutItem",
            )

    def get_item(self, TableName, Key):
        self._record("get_item", {"TableName": TableName, "Key": Key})
        table = self._table(TableName, "GetItem")
        item = table.get(self._primary_key(TableName, Key))
        return {"Item": copy.deepcopy(item)} if item else {}

    def put_item(self, TableName, Item):
        self._record("put_item", {"TableName": TableName, "Item": Item})
        table = self._table(TableName, "PutItem")
        with self.lock:
            table[self._primary_key(TableName, Item)] = copy.deepcopy(Item)
        return {}

    def delete_item(self, TableName, Key):
        self._record("delete_item", {"TableName": TableName, "Key": Key})
        table = self._table(TableName, "DeleteItem")
        with self.lock:
            table.pop(self._primary_key(TableName, Key), None)
        return {}

    def _page(self, items, limit, start):
        offset = int(start["__offset"]["N"]) if start else 0
        page = items[offset:offset + limit]
        response = {"Items": copy.deepcopy(page), "Count": len(page)}
        if offset + limit < len(items):
            response["LastEvaluatedKey"] = {"__offset": {"N": str(offset + limit)}}
        return response

    def scan(self, TableName, ExclusiveStartKey=None, Limit=None):
        self._record("scan", {"TableName": TableName, "ExclusiveStartKey": ExclusiveStartKey})
        table = self._table(TableName, "Scan")
        items = [table[key] for key in sorted(table)]
        return self._page(items, Limit or self.scan_page_size, ExclusiveStartKey)

    def query(
        self,
        TableName,
        KeyConditionExpression,
        ExpressionAttributeNames,
        ExpressionAttributeValues,
        IndexName=None,
        FilterExpression=None,
        Limit=None,
        ExclusiveStartKey=None
    ):
        self._record("query", {
            "TableName": TableName,
            "IndexName": IndexName,
            "KeyConditionExpression": KeyConditionExpression,
            "ExpressionAttributeNames": ExpressionAttributeNames,
            "ExpressionAttributeValues": ExpressionAttributeValues,
            "FilterExpression": FilterExpression,
            "Limit": Limit,
        })
        table = self._table(TableName, "Query")
        schema = self.indexes[(TableName, IndexName)] if IndexName else self.schemas[TableName]

        match = KEY_CONDITION.match(KeyConditionExpression)
        assert match, f"Unsupported key condition: {KeyConditionExpression}"
        assert ExpressionAttributeNames["#pk"] == schema.hash_key
        if "#sk" in ExpressionAttributeNames:
            assert ExpressionAttributeNames["#sk"] == schema.range_key

        pk_value = dynamodb_to_python(ExpressionAttributeValues[":pk"])
        sk_value = dynamodb_to_python(ExpressionAttributeValues.get(":sk"))

        def key_matches(item):
            if schema.hash_key not in item or dynamodb_to_python(item[schema.hash_key]) != pk_value:
                return False
            if schema.range_key and schema.range_key not in item:
                return False
            if match.group("begins"):
                return dynamodb_to_python(item[schema.range_key]).startswith(sk_value)
            if match.group("equals"):
                return dynamodb_to_python(item[schema.range_key]) == sk_value
            return True

        items = sorted(
            (item for item in table.values() if key_matches(item)),
            key=lambda item: (
                dynamodb_to_python(item[schema.range_key]) if schema.range_key else "",
                self._primary_key(TableName, item),
            ),
        )

        response = self._page(items, Limit or len(items) or 1, ExclusiveStartKey)

        if FilterExpression:
            conditions = []
            for clause in FilterExpression.split(" AND "):
                clause_match = FILTER_CLAUSE.match(clause)
                assert clause_match, f"Unsupported filter: {clause}"
                name, value = clause_match.groups()
                conditions.append((ExpressionAttributeNames[name], ExpressionAttributeValues[value]))
            response["Items"] = [
                item for item in response["Items"]
                if all(item.get(attr) == value for attr, value in conditions)
            ]
            response["Count"] = len(response["Items"])

        return response


@pytest.fixture
def dynamodb():
    client = FakeDynamoDBClient()
    client.create_table(SPOTS_TABLE, Spot.KEY_SCHEMA, [CONTINENT_COUNTRY_INDEX, CONTINENT_GEOHASH_INDEX])
    client.create_table(USERS_TABLE, User.KEY_SCHEMA)
    client.create_table(FAVORITES_TABLE, Favorite.KEY_SCHEMA)
    return client


@pytest.fixture
def user_persistence(dynamodb):
    """User table as an example with a simple hash key"""
    return PersistenceService(User, USERS_TABLE, client=dynamodb)


@pytest.fixture
def favorite_persistence(dynamodb):
    """Favorite table as an example with a composite key (hash key + range key)"""
    return PersistenceService(Favorite, FAVORITES_TABLE, client=dynamodb)


@pytest.fixture
def spot_persistence(dynamodb):
    return PersistenceService(Spot, SPOTS_TABLE, client=dynamodb)


@pytest.fixture
def spot_service(spot_persistence):
    return SpotService(persistence=spot_persistence)


@pytest.fixture
def user_service(user_persistence):
    return UserService(persistence=user_persistence)


@pytest.fixture
def favorite_service(favorite_persistence):
    return FavoriteService(persistence=favorite_persistence)
