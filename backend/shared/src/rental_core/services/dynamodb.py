"""DynamoDB adapter for the pricing rule and blocked date stores.

Each store is a single-key table named ``{prefix}-{store}``. Writes that
must not clobber (create) or must hit an existing row (update, delete) go
through the guarded helpers, which report a failed condition as ``False``
instead of raising.
"""

import os
from typing import Any

import boto3
from botocore.exceptions import ClientError

# Partition key attribute of every store this backend owns
TABLE_KEYS: dict[str, str] = {
    "pricing-rules": "rule_id",
    "blocked-dates": "range_id",
}

_CONDITION_FAILED = "ConditionalCheckFailedException"

_dynamodb_service_instance: "DynamoDBService | None" = None


def get_dynamodb_service(environment: str | None = None) -> "DynamoDBService":
    """Get the process-wide DynamoDB adapter, creating it on first use.

    Args:
        environment: Environment name. Only used on first call.
    """
    global _dynamodb_service_instance
    if _dynamodb_service_instance is None:
        _dynamodb_service_instance = DynamoDBService(environment)
    return _dynamodb_service_instance


def reset_dynamodb_service() -> None:
    """Drop the cached adapter so the next call builds a new one.

    Tests call this so the adapter is created inside their mock_aws context.
    """
    global _dynamodb_service_instance
    _dynamodb_service_instance = None


class DynamoDBService:
    """Table access for the rental stores, with environment-prefixed names.

    Configuration (environment variables):
        ENVIRONMENT: dev/prod, used in the default prefix
        DYNAMODB_TABLE_PREFIX: overrides the ``rental-{ENVIRONMENT}`` prefix
        DYNAMODB_ENDPOINT_URL: DynamoDB Local or another compatible endpoint
    """

    def __init__(self, environment: str | None = None) -> None:
        self.environment = environment or os.getenv("ENVIRONMENT", "dev")
        self.name_prefix = os.getenv("DYNAMODB_TABLE_PREFIX") or f"rental-{self.environment}"
        self._dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=os.getenv("DYNAMODB_ENDPOINT_URL") or None,
        )

    def table_name(self, table: str) -> str:
        """Full table name for a store."""
        return f"{self.name_prefix}-{table}"

    def _table(self, table: str) -> Any:
        return self._dynamodb.Table(self.table_name(table))

    def _key_attribute(self, table: str) -> str:
        try:
            return TABLE_KEYS[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}") from None

    def get_item(self, table: str, key: dict[str, Any]) -> dict[str, Any] | None:
        """Fetch one item, or None when the key is absent."""
        item: dict[str, Any] | None = self._table(table).get_item(Key=key).get("Item")
        return item

    def put_item(
        self,
        table: str,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> bool:
        """Write an item, optionally guarded by a condition.

        Returns:
            False when the condition did not hold, True otherwise
        """
        kwargs: dict[str, Any] = {"Item": item}
        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression
        return self._guarded(self._table(table).put_item, **kwargs)

    def create_item(self, table: str, item: dict[str, Any]) -> bool:
        """Insert an item whose key must not exist yet."""
        key = self._key_attribute(table)
        return self.put_item(table, item, f"attribute_not_exists({key})")

    def replace_item(self, table: str, item: dict[str, Any]) -> bool:
        """Overwrite an item whose key must already exist."""
        key = self._key_attribute(table)
        return self.put_item(table, item, f"attribute_exists({key})")

    def delete_item(self, table: str, key_value: str) -> bool:
        """Delete an existing item by its key value.

        Returns:
            False when no item had that key
        """
        key = self._key_attribute(table)
        return self._guarded(
            self._table(table).delete_item,
            Key={key: key_value},
            ConditionExpression=f"attribute_exists({key})",
        )

    def scan(self, table: str) -> list[dict[str, Any]]:
        """Read every item of a store, following pagination.

        Both stores hold tens of rows, so a full scan is acceptable.
        """
        resource = self._table(table)
        kwargs: dict[str, Any] = {}
        items: list[dict[str, Any]] = []

        while True:
            page = resource.scan(**kwargs)
            items.extend(page.get("Items", []))
            if "LastEvaluatedKey" not in page:
                return items
            kwargs["ExclusiveStartKey"] = page["LastEvaluatedKey"]

    @staticmethod
    def _guarded(operation: Any, **kwargs: Any) -> bool:
        try:
            operation(**kwargs)
        except ClientError as e:
            if e.response["Error"]["Code"] == _CONDITION_FAILED:
                return False
            raise
        return True
