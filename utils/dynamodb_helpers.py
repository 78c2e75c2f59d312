"""Helper functions for DynamoDB data type conversions and expressions"""
from typing import Dict, Optional, Tuple

from models.keys import CompositeKey, KeySchema, SimpleKey
from utils.exceptions import InconsistentKey


def python_to_dynamodb(obj):
    """
    Convert Python object to DynamoDB format
    Handles nested dicts, lists, strings, numbers, booleans
    """
    if obj is None:
        return {"NULL": True}
    elif isinstance(obj, bool):
        return {"BOOL": obj}
    elif isinstance(obj, (int, float)):
        return {"N": str(obj)}
    elif isinstance(obj, str):
        return {"S": obj}
    elif isinstance(obj, list):
        return {"L": [python_to_dynamodb(item) for item in obj]}
    elif isinstance(obj, dict):
        return {"M": {k: python_to_dynamodb(v) for k, v in obj.items()}}
    else:
        # Fallback to string
        return {"S": str(obj)}


def dynamodb_to_python(obj):
    """
    Convert DynamoDB format to Python object
    """
    if not isinstance(obj, dict):
        return obj

    if "S" in obj:
        return obj["S"]
    elif "N" in obj:
        num = obj["N"]
        if '.' in num or 'e' in num.lower():
            return float(num)
        return int(num)
    elif "BOOL" in obj:
        return obj["BOOL"]
    elif "NULL" in obj:
        return None
    elif "L" in obj:
        return [dynamodb_to_python(item) for item in obj["L"]]
    elif "M" in obj:
        return {k: dynamodb_to_python(v) for k, v in obj["M"].items()}
    else:
        return obj


def key_to_dynamodb(schema: KeySchema, key) -> dict:
    """
    Build the DynamoDB Key parameter for a primary key

    Raises:
        InconsistentKey: key shape does not match the schema, or a part is missing
    """
    if isinstance(key, CompositeKey):
        if not schema.is_composite:
            raise InconsistentKey(f"Composite key given for simple key schema ({schema.hash_key})")
        if not key.hash_value or not key.range_value:
            raise InconsistentKey(
                f"Composite key requires both {schema.hash_key} and {schema.range_key}"
            )
        return {
            schema.hash_key: python_to_dynamodb(key.hash_value),
            schema.range_key: python_to_dynamodb(key.range_value),
        }
    elif isinstance(key, SimpleKey):
        if schema.is_composite:
            raise InconsistentKey(
                f"Simple key given for composite key schema ({schema.hash_key}, {schema.range_key})"
            )
        if not key.hash_value:
            raise InconsistentKey(f"Key requires {schema.hash_key}")
        return {schema.hash_key: python_to_dynamodb(key.hash_value)}
    else:
        raise InconsistentKey(f"Unsupported key type: {type(key).__name__}")


def build_key_condition(
    schema: KeySchema,
    hash_value,
    range_value=None,
    begins_with: bool = False
) -> Tuple[str, Dict[str, str], Dict[str, dict]]:
    """
    Build KeyConditionExpression with its attribute names and values

    Returns:
        Tuple of (expression, ExpressionAttributeNames, ExpressionAttributeValues)
    """
    names = {'#pk': schema.hash_key}
    values = {':pk': python_to_dynamodb(hash_value)}
    expression = '#pk = :pk'

    if range_value is not None:
        if not schema.is_composite:
            raise InconsistentKey(f"Sort condition given for key without range key ({schema.hash_key})")
        names['#sk'] = schema.range_key
        values[':sk'] = python_to_dynamodb(range_value)
        if begins_with:
            expression += ' AND begins_with(#sk, :sk)'
        else:
            expression += ' AND #sk = :sk'

    return expression, names, values


def build_filter_expression(
    filters: Optional[Dict[str, object]]
) -> Tuple[Optional[str], Dict[str, str], Dict[str, dict]]:
    """
    Build an equality FilterExpression, one clause per attribute

    Returns:
        Tuple of (expression or None, ExpressionAttributeNames, ExpressionAttributeValues)
    """
    if not filters:
        return None, {}, {}

    clauses = []
    names = {}
    values = {}
    for i, (attribute, value) in enumerate(sorted(filters.items())):
        names[f'#f{i}'] = attribute
        values[f':f{i}'] = python_to_dynamodb(value)
        clauses.append(f'#f{i} = :f{i}')

    return ' AND '.join(clauses), names, values
