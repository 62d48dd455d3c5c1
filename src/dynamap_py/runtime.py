from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, cast

import boto3
from botocore.config import Config


@dataclass(frozen=True)
class ClientConfig:
    access_key: str | None = None
    secret_key: str | None = None
    session_token: str | None = None
    region: str | None = None
    endpoint: str | None = None
    proxy_host: str | None = None
    proxy_port: int | None = None
    connect_timeout: float | None = None
    read_timeout: float | None = None
    max_attempts: int | None = None


@dataclass(frozen=True)
class AwsCallMetric:
    operation: str
    table: str | None
    seconds: float
    ok: bool
    service: str = "dynamodb"


def _proxy_url(host: str, port: int | None) -> str:
    url = host if "://" in host else f"http://{host}"
    if port is not None:
        url = f"{url}:{port}"
    return url


def create_boto3_config(config: ClientConfig) -> Config:
    kwargs: dict[str, Any] = {}
    if config.connect_timeout is not None:
        kwargs["connect_timeout"] = config.connect_timeout
    if config.read_timeout is not None:
        kwargs["read_timeout"] = config.read_timeout
    if config.max_attempts is not None:
        kwargs["retries"] = {"max_attempts": config.max_attempts, "mode": "standard"}
    if config.proxy_host:
        proxy = _proxy_url(config.proxy_host, config.proxy_port)
        kwargs["proxies"] = {"http": proxy, "https": proxy}
    return Config(**kwargs)


_UNMETERED = frozenset({"can_paginate", "close", "get_paginator", "get_waiter"})


class _MeteredClient:
    def __init__(self, client: Any, on_call: Callable[[AwsCallMetric], None]) -> None:
        self._client = client
        self._on_call = on_call

    def _record(self, operation: str, table: str | None, start: float, ok: bool) -> None:
        self._on_call(AwsCallMetric(operation=operation, table=table, seconds=time.monotonic() - start, ok=ok))

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._client, name)
        if name.startswith("_") or name in _UNMETERED or not callable(attr):
            return attr

        def call(**kwargs: Any) -> Any:
            table = kwargs.get("TableName")
            start = time.monotonic()
            try:
                out = attr(**kwargs)
            except Exception:
                self._record(name, table, start, ok=False)
                raise
            self._record(name, table, start, ok=True)
            return out

        return call


def instrument_dynamodb_client(client: Any, *, on_call: Callable[[AwsCallMetric], None]) -> Any:
    return _MeteredClient(client, on_call)


def create_dynamodb_client(
    config: ClientConfig | None = None,
    *,
    session: Any | None = None,
    metrics: Callable[[AwsCallMetric], None] | None = None,
) -> Any:
    config = config or ClientConfig()
    sess = session or boto3.session.Session(
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        aws_session_token=config.session_token,
        region_name=config.region,
    )
    client = cast(Any, sess).client(
        "dynamodb",
        region_name=config.region,
        endpoint_url=config.endpoint,
        config=create_boto3_config(config),
    )
    if metrics is not None:
        client = instrument_dynamodb_client(client, on_call=metrics)
    return client
