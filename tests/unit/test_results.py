from __future__ import annotations

from datetime import UTC, datetime

import pytest

from dynamap_py import (
    BatchGetSpec,
    Delete,
    KeySchemaElement,
    Page,
    Put,
    ResultKind,
    Throughput,
    ValidationError,
    build_batch_get,
    build_batch_write,
    map_result,
)
from dynamap_py.results import (
    map_batch_get,
    map_batch_write,
    map_get_item,
    map_page,
    map_table_description,
)


def test_map_get_item_decodes_or_returns_none() -> None:
    assert map_get_item({"Item": {"id": {"N": "1"}, "score": {"N": "2.5"}}}) == {"id": 1, "score": 2.5}
    assert map_get_item({}) is None
    assert map_get_item({"Item": {}}) is None


def test_map_page_with_last_key() -> None:
    page = map_page(
        {
            "Items": [{"id": {"N": "1"}}, {"id": {"N": "2"}}],
            "Count": 2,
            "ScannedCount": 4,
            "LastEvaluatedKey": {"id": {"N": "2"}},
        }
    )
    assert page == Page(items=[{"id": 1}, {"id": 2}], count=2, last_key={"id": 2})


def test_map_page_final_page_has_no_last_key() -> None:
    page = map_page({"Items": [{"id": {"S": "a"}}]})
    assert page.last_key is None
    assert page.count == 1
    assert map_page({}) == Page(items=[], count=0, last_key=None)


def test_map_batch_get_responses_and_unprocessed() -> None:
    result = map_batch_get(
        {
            "Responses": {"users": [{"name": {"S": "alice"}}], "posts": []},
            "UnprocessedKeys": {
                "users": {"Keys": [{"name": {"S": "bob"}}], "ConsistentRead": True},
                "empty": {"Keys": []},
            },
        }
    )
    assert result.responses == {"users": [{"name": "alice"}], "posts": []}
    assert result.unprocessed == {
        "users": BatchGetSpec(keys=[{"name": "bob"}], attrs=None, consistent=True),
    }


def test_unprocessed_batch_get_keys_can_be_resubmitted() -> None:
    result = map_batch_get(
        {
            "Responses": {},
            "UnprocessedKeys": {
                "posts": {"Keys": [{"id": {"N": "3"}}], "AttributesToGet": ["subject"]},
            },
        }
    )
    assert build_batch_get(result.unprocessed) == {
        "RequestItems": {"posts": {"Keys": [{"id": {"N": "3"}}], "AttributesToGet": ["subject"]}}
    }


def test_map_batch_write_unprocessed_round_trips_to_pending_ops() -> None:
    result = map_batch_write(
        {
            "UnprocessedItems": {
                "A": [
                    {"PutRequest": {"Item": {"id": {"N": "1"}}}},
                    {"DeleteRequest": {"Key": {"id": {"N": "2"}}}},
                ],
                "B": [],
            }
        }
    )
    assert result.unprocessed == {"A": [Put({"id": 1}), Delete({"id": 2})]}
    assert result.pending() == [("A", Put({"id": 1})), ("A", Delete({"id": 2}))]
    assert build_batch_write(result.pending())["RequestItems"]["A"][1] == {
        "DeleteRequest": {"Key": {"id": {"N": "2"}}}
    }


def test_map_batch_write_without_unprocessed() -> None:
    assert map_batch_write({}).pending() == []
    assert map_batch_write({"UnprocessedItems": {}}).unprocessed == {}


def test_map_batch_write_rejects_unknown_request() -> None:
    with pytest.raises(ValidationError, match="unsupported write request"):
        map_batch_write({"UnprocessedItems": {"A": [{"UpdateRequest": {}}]}})


def test_map_table_description() -> None:
    created = datetime(2024, 1, 2, tzinfo=UTC)
    desc = map_table_description(
        {
            "Table": {
                "TableName": "users",
                "CreationDateTime": created,
                "ItemCount": 12,
                "KeySchema": [
                    {"AttributeName": "id", "KeyType": "HASH"},
                    {"AttributeName": "ts", "KeyType": "RANGE"},
                ],
                "ProvisionedThroughput": {"ReadCapacityUnits": 5, "WriteCapacityUnits": 3},
                "TableStatus": "ACTIVE",
            }
        }
    )
    assert desc.name == "users"
    assert desc.creation_date == created
    assert desc.item_count == 12
    assert desc.key_schema == [KeySchemaElement("id", "HASH"), KeySchemaElement("ts", "RANGE")]
    assert desc.throughput == Throughput(read=5, write=3)
    assert desc.status == "active"


def test_map_table_description_requires_table() -> None:
    with pytest.raises(ValidationError):
        map_table_description({})


def test_map_result_dispatches_on_kind() -> None:
    scan_resp = {"Items": [{"id": {"N": "1"}}], "Count": 1}
    assert map_result(ResultKind.SCAN, scan_resp) == Page(items=[{"id": 1}], count=1)
    assert map_result(ResultKind.QUERY, scan_resp) == map_result(ResultKind.SCAN, scan_resp)
    assert map_result("get_item", {"Item": {"id": {"S": "x"}}}) == {"id": "x"}
    assert map_result(ResultKind.BATCH_WRITE, {}).pending() == []
    assert map_result(ResultKind.BATCH_GET, {}).responses == {}
    assert map_result(ResultKind.DESCRIBE_TABLE, {"Table": {"TableStatus": "CREATING"}}).status == "creating"


def test_map_result_rejects_unknown_kind() -> None:
    with pytest.raises(ValidationError, match="unsupported result kind"):
        map_result("list_tables", {})
