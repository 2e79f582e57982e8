#!/usr/bin/env python3

import asyncio
import logging
from typing import Optional

import click

from nscache import InMemoryStore, KeyValueStore, RedisStore, TtlCache


def _show(label: str, value: object) -> None:
    print(f"  {label:<28} {value!r}")


async def run(store: KeyValueStore, namespace: str, ttl: float, interval: float) -> None:
    cache = TtlCache(store, namespace=namespace, immediate_clean=False, cleaning_interval_seconds=interval)
    physical = cache.namespacer.to_physical("foo")
    try:
        print(f"set foo=bar ttl={ttl}s (physical key {physical!r})")
        await cache.set("foo", "bar", ttl_seconds=ttl)
        _show("cache.get('foo')", await cache.get("foo"))
        _show("store entry", await store.get(physical))

        print(f"\nset idle=untouched ttl={ttl}s, never read again")
        await cache.set("idle", "untouched", ttl_seconds=ttl)

        wait = max(ttl, interval) + interval / 2
        print(f"\nsleeping {wait:.2f}s ...")
        await asyncio.sleep(wait)

        _show("store entry for idle", await store.get(cache.namespacer.to_physical("idle")))
        _show("cache.get('foo')", await cache.get("foo"))
        _show("store entry for foo", await store.get(physical))
    finally:
        await cache.close()
        await store.close()


@click.command()
@click.option("--redis-url", default=None, help="Use Redis at this URL instead of an in-memory store")
@click.option("--namespace", default="demo", help="Cache namespace")
@click.option("--ttl", default=0.5, type=float, help="Entry TTL in seconds")
@click.option("--interval", default=1.0, type=float, help="Sweep interval in seconds")
@click.option("--verbose", is_flag=True, help="Show nscache debug logging")
def main(redis_url: Optional[str], namespace: str, ttl: float, interval: float, verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    store: KeyValueStore = RedisStore(redis_url) if redis_url else InMemoryStore()
    asyncio.run(run(store, namespace, ttl, interval))


if __name__ == "__main__":
    main()
