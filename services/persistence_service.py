"""Generic persistence service over DynamoDB tables"""
from typing import Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError
from aws_lambda_powertools import Logger

from config.constants import QUERY_PAGE_SIZE
from models.keys import CompositeKey, SecondaryIndex, SimpleKey
from utils.dynamodb import dynamodb_client, generate_id
from utils.dynamodb_helpers import (
    build_filter_expression,
    build_key_condition,
    key_to_dynamodb,
)
from utils.exceptions import StoreUnavailable

logger = Logger()


class PersistenceService:
    """
    CRUD, scan and index queries for one entity class

    The entity class declares KEY_SCHEMA and implements key(),
    to_dynamodb_item() and from_dynamodb_item(); simple key entities also
    implement assign_id() so that save() can generate their id. The service
    holds no entity state and never caches.
    """

    def __init__(self, entity_class, table_name: str, client=None):
        self.entity_class = entity_class
        self.table_name = table_name
        self.key_schema = entity_class.KEY_SCHEMA
        self.client = client or dynamodb_client

    def _call(self, operation: str, **params) -> dict:
        """Invoke a DynamoDB client operation, surfacing failures as StoreUnavailable"""
        try:
            return getattr(self.client, operation)(TableName=self.table_name, **params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"DynamoDB {operation} on {self.table_name} failed: {str(e)}")
            raise StoreUnavailable(f"Failed to {operation} on {self.table_name}: {str(e)}") from e

    def get_by_key(self, key):
        """Get entity by its primary key, None if absent"""
        response = self._call('get_item', Key=key_to_dynamodb(self.key_schema, key))

        if 'Item' not in response:
            return None

        return self.entity_class.from_dynamodb_item(response['Item'])

    def get_by_hash_key(self, hash_value):
        return self.get_by_key(SimpleKey(hash_value))

    def get_by_composite_key(self, hash_value, range_value):
        return self.get_by_key(CompositeKey(hash_value, range_value))

    def save(self, entity):
        """
        Insert or fully replace an entity

        A simple key entity without id gets a generated one before the write.

        Returns:
            The entity as persisted
        """
        key = entity.key()
        if isinstance(key, SimpleKey) and not key.hash_value and not self.key_schema.is_composite:
            entity.assign_id(generate_id(getattr(entity, 'ID_PREFIX', 'ID')))
            logger.info(f"Generated id {entity.key().hash_value} for new {type(entity).__name__}")

        # validate shape before writing
        key_to_dynamodb(self.key_schema, entity.key())

        self._call('put_item', Item=entity.to_dynamodb_item())
        return entity

    def delete(self, entity) -> None:
        """Delete an entity; deleting an absent key is a no-op"""
        self.delete_by_key(entity.key())

    def delete_by_key(self, key) -> None:
        self._call('delete_item', Key=key_to_dynamodb(self.key_schema, key))

    def find_all(self) -> list:
        """List all entities (full table scan - administrative and test use only)"""
        entities = []
        params = {}

        while True:
            response = self._call('scan', **params)

            for item in response.get('Items', []):
                entities.append(self.entity_class.from_dynamodb_item(item))

            last_evaluated_key = response.get('LastEvaluatedKey')
            if not last_evaluated_key:
                break
            params['ExclusiveStartKey'] = last_evaluated_key

        return entities

    def delete_all(self) -> int:
        """Delete every entity in the table (administrative and test use only)"""
        entities = self.find_all()
        for entity in entities:
            self.delete(entity)
        logger.info(f"Deleted {len(entities)} items from {self.table_name}")
        return len(entities)

    def query(
        self,
        index: Optional[SecondaryIndex],
        hash_value,
        range_value=None,
        begins_with: bool = False,
        filters: Optional[Dict[str, object]] = None,
        page_size: int = QUERY_PAGE_SIZE
    ) -> list:
        """
        Query the table or one of its secondary indexes

        Args:
            index: Secondary index to query, None for the table's own key
            hash_value: Exact partition key value
            range_value: Optional sort key value (exact, or prefix with begins_with)
            begins_with: Match range_value as a sort key prefix
            filters: Attribute equality filters applied server side after the key match
            page_size: Items evaluated per page; pages are followed until exhausted

        Returns:
            List of entities
        """
        schema = index.key_schema if index else self.key_schema
        key_condition, names, values = build_key_condition(schema, hash_value, range_value, begins_with)
        filter_expression, filter_names, filter_values = build_filter_expression(filters)
        names.update(filter_names)
        values.update(filter_values)

        params = {
            'KeyConditionExpression': key_condition,
            'ExpressionAttributeNames': names,
            'ExpressionAttributeValues': values,
            'Limit': page_size,
        }
        if index:
            params['IndexName'] = index.name
        if filter_expression:
            params['FilterExpression'] = filter_expression

        entities = []
        while True:
            response = self._call('query', **params)

            for item in response.get('Items', []):
                entities.append(self.entity_class.from_dynamodb_item(item))

            last_evaluated_key = response.get('LastEvaluatedKey')
            if not last_evaluated_key:
                break
            params['ExclusiveStartKey'] = last_evaluated_key

        return entities
