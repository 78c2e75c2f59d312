"""DynamoDB utility functions"""
import os
import time
import secrets

import boto3


AWS_REGION = os.environ.get('AWS_REGION', 'eu-central-1')

# Initialize DynamoDB client
dynamodb_client = boto3.client('dynamodb', region_name=AWS_REGION)

# Table names from environment variables
TABLES = {
    'SPOTS': os.environ.get('SPOTS_TABLE_NAME', 'spots'),
    'USERS': os.environ.get('USERS_TABLE_NAME', 'users'),
    'FAVORITES': os.environ.get('FAVORITES_TABLE_NAME', 'favorites'),
}


def generate_id(prefix: str) -> str:
    """Generate a unique ID with a prefix

    Args:
        prefix: Static prefix for the ID (e.g., 'SPT' for spots, 'USR' for users)

    Returns:
        A unique ID in the format: {PREFIX}-{timestamp}-{random}
    """
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(6)}"
