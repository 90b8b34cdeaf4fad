"""
Continuous traffic against the gateway.

    python -m loadgen --url http://localhost:8080/api/aggregate --interval 0.5

Sends one request every ``--interval`` seconds until ``--count`` requests have
gone out (0 means forever) and prints a running tally of status codes.
Status 0 stands for a transport error.
"""
import argparse
import asyncio
import time
from collections import Counter
from typing import Optional

import httpx


async def send_one(client: httpx.AsyncClient, url: str) -> int:
    try:
        r = await client.get(url)
        return r.status_code
    except httpx.HTTPError:
        return 0


async def run(url: str, interval: float, count: int = 0, report_every: int = 20,
              client: Optional[httpx.AsyncClient] = None) -> Counter:
    tally = Counter()
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=15.0)
    sent = 0
    try:
        while count == 0 or sent < count:
            t0 = time.perf_counter()
            status = await send_one(client, url)
            tally[status] += 1
            sent += 1
            if report_every and sent % report_every == 0:
                print(f"  {sent} sent {dict(sorted(tally.items()))}")
            await asyncio.sleep(max(0.0, interval - (time.perf_counter() - t0)))
    finally:
        if owns_client:
            await client.aclose()
    return tally


def main(argv=None):
    p = argparse.ArgumentParser(description="gateway load generator")
    p.add_argument("--url", default="http://gateway:8080/api/aggregate")
    p.add_argument("--interval", type=float, default=0.5)
    p.add_argument("--count", type=int, default=0)
    args = p.parse_args(argv)
    print(f"GET {args.url} every {args.interval}s. Ctrl+C to stop.")
    try:
        tally = asyncio.run(run(args.url, args.interval, args.count))
    except KeyboardInterrupt:
        return
    print("done", dict(sorted(tally.items())))


if __name__ == "__main__":
    main()
