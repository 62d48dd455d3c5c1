from __future__ import annotations

import os
import uuid

from dynamap_py import Client, ClientConfig, KeyAttr, RangeClause, TableSpec, ThroughputSpec


def _client() -> Client:
    return Client(
        config=ClientConfig(
            endpoint=os.environ.get("DYNAMODB_ENDPOINT", "http://localhost:8000"),
            region=os.environ.get("AWS_REGION", "us-east-1"),
            access_key=os.environ.get("AWS_ACCESS_KEY_ID", "dummy"),
            secret_key=os.environ.get("AWS_SECRET_ACCESS_KEY", "dummy"),
        )
    )


def main() -> None:
    client = _client()
    table = f"dynamap_py_example_{uuid.uuid4().hex[:12]}"

    client.create_table(
        TableSpec(
            name=table,
            hash_key=KeyAttr("pk", "s"),
            range_key=KeyAttr("sk", "s"),
            throughput=ThroughputSpec(read=1, write=1),
        )
    )
    client.raw.get_waiter("table_exists").wait(TableName=table)

    try:
        client.put_item(table, {"pk": "A", "sk": "001", "value": 1})
        client.put_item(table, {"pk": "A", "sk": "010", "value": 10})
        client.put_item(table, {"pk": "A", "sk": "100", "value": 100, "tags": {"x", "y"}})

        print("get:", client.get_item(table, {"pk": "A", "sk": "010"}))

        page = client.query(table, {"pk": "A"}, RangeClause.begins_with("sk", "0"))
        print("query begins_with('0'):", page.items)

        cursor = None
        while True:
            page = client.scan(table, limit=1, cursor=cursor)
            print("scan page:", page.items)
            if page.last_key is None:
                break
            cursor = page.last_key
    finally:
        client.delete_table(table)


if __name__ == "__main__":
    main()
