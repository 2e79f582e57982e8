#!/usr/bin/env python3

import asyncio
import time
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import click

from nscache import RedisStore, TtlCache


def _now() -> str:
    return time.strftime("%H:%M:%S")


def _split(key: str, separator: str) -> Tuple[str, str]:
    namespace, _, logical = key.partition(separator)
    return namespace, logical


async def snapshot(store: RedisStore, separator: str, namespace: Optional[str]) -> Dict[str, List[Tuple[str, Optional[float]]]]:
    grouped: Dict[str, List[Tuple[str, Optional[float]]]] = defaultdict(list)
    now = time.time()
    for key in await store.keys():
        if not isinstance(key, str) or separator not in key:
            continue
        ns, logical = _split(key, separator)
        if namespace and ns != namespace:
            continue
        entry = await store.get(key)
        if entry is None:
            continue
        remaining = None if entry.expires_at is None else entry.expires_at - now
        grouped[ns].append((logical, remaining))
    return grouped


def _format_remaining(remaining: Optional[float]) -> str:
    if remaining is None:
        return "never"
    if remaining < 0:
        return f"expired {-remaining:.1f}s ago"
    return f"{remaining:.1f}s"


async def monitor(store: RedisStore, separator: str, namespace: Optional[str], interval: float) -> None:
    while True:
        print(f"\n[{_now()}] nscache monitor separator={separator!r}")
        grouped = await snapshot(store, separator, namespace)
        if not grouped:
            print("  No namespaced entries found.")
        for ns in sorted(grouped):
            entries = sorted(grouped[ns])
            print(f"  {ns}  entries={len(entries)}")
            for logical, remaining in entries:
                print(f"      - {logical:<30} ttl={_format_remaining(remaining)}")
        await asyncio.sleep(interval)


async def clean(store: RedisStore, separator: str, namespace: str) -> None:
    async with TtlCache(store, namespace=namespace, separator=separator, disable_cleaning=True, immediate_clean=False) as cache:
        before = len((await snapshot(store, separator, namespace)).get(namespace, []))
        await cache.clean_expired()
        after = len((await snapshot(store, separator, namespace)).get(namespace, []))
    print(f"Cleaned namespace {namespace!r}: {before - after} expired entries removed, {after} left")


@click.command()
@click.option("--url", default="redis://localhost:6379/0", help="Redis URL")
@click.option("--separator", default="-", help="Namespace separator used by the caches")
@click.option("--namespace", default=None, help="Only show this namespace")
@click.option("--interval", default=2.0, type=float, help="Polling interval seconds")
@click.option("--clean", "clean_namespace", default=None, help="Sweep expired entries of this namespace and exit")
def main(url: str, separator: str, namespace: Optional[str], interval: float, clean_namespace: Optional[str]) -> None:
    store = RedisStore(url)

    async def _run() -> None:
        try:
            if clean_namespace:
                await clean(store, separator, clean_namespace)
                return
            await monitor(store, separator, namespace, interval)
        finally:
            await store.close()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
