"""Push relay database management CLI.

Creates and drops the relational session schema used under the production
overlay, and provisions the DynamoDB session table for AWS deployments.

Usage:
    python src/manage.py setup-db        # Create relational tables
    python src/manage.py drop-db         # Drop relational tables
    python src/manage.py create-table    # Create the DynamoDB session table
"""

import argparse
import sys


def setup_database():
    from messaging.domain import messaging
    from messaging.utils.db import setup_db

    print("Initializing messaging domain...")
    messaging.init()
    touched = setup_db(messaging)
    if touched:
        print(f"  Session schema ready on: {', '.join(touched)}")
    else:
        print("  No relational provider configured; nothing to create.")
    print("Done.")


def drop_database():
    from messaging.domain import messaging
    from messaging.utils.db import drop_db

    print("Initializing messaging domain...")
    messaging.init()
    touched = drop_db(messaging)
    if touched:
        print(f"  Session schema dropped on: {', '.join(touched)}")
    else:
        print("  No relational provider configured; nothing to drop.")
    print("Done.")


def create_dynamodb_table(table_name=None):
    """Create the session table with its token lookup index."""
    import boto3
    from messaging.config import get_settings

    settings = get_settings()
    table_name = table_name or settings.table_name
    client = boto3.client(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.aws_endpoint_url,
    )

    print(f"Creating DynamoDB table {table_name}...")
    client.create_table(
        TableName=table_name,
        AttributeDefinitions=[
            {"AttributeName": "id", "AttributeType": "S"},
            {"AttributeName": "token", "AttributeType": "S"},
        ],
        KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
        GlobalSecondaryIndexes=[
            {
                "IndexName": settings.token_index_name,
                "KeySchema": [{"AttributeName": "token", "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
            }
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    client.get_waiter("table_exists").wait(TableName=table_name)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Push relay database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create relational session tables")
    subparsers.add_parser("drop-db", help="Drop relational session tables")

    table_parser = subparsers.add_parser("create-table", help="Create the DynamoDB session table")
    table_parser.add_argument("--table-name", help="Table name (default: TABLE_NAME setting)")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-table":
        create_dynamodb_table(args.table_name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
