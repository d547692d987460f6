import argparse
import asyncio

import httpx
from rich import print

from cart_service import config
from sdk.cart_client import CartClient


async def worker(client: CartClient, ac: httpx.AsyncClient, product_id: str, times: int) -> int:
    failures = 0
    for _ in range(times):
        r = await client.add_item_async(product_id, 1, client=ac)
        if r.status_code != 201:
            failures += 1
    return failures


async def main(base_url: str, workers: int, adds: int, product_id: str):
    c = CartClient(base_url=base_url)

    print(f"[cyan]Clearing cart at {c.base_url}...[/cyan]")
    print(c.clear_cart())

    print(f"\n⚡ {workers} workers x {adds} increments of '{product_id}'...")
    async with httpx.AsyncClient(timeout=c.timeout) as ac:
        failures = await asyncio.gather(*(worker(c, ac, product_id, adds) for _ in range(workers)))

    item = c.get_item(product_id)
    expected = workers * adds - sum(failures)
    observed = item["quantity"] if item else 0
    style = "green" if observed == expected else "red"
    print(f"\n📦 expected [bold]{expected}[/bold], observed [{style}]{observed}[/{style}]")
    if sum(failures):
        print(f"[yellow]{sum(failures)} requests failed[/yellow]")
    print("🛒 Cart:", c.get_cart())


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent add_item demo")
    parser.add_argument("--base-url", default=config.BASE_URL)
    parser.add_argument("--workers", type=int, default=10)
    parser.add_argument("--adds", type=int, default=100)
    parser.add_argument("--product-id", default="CONCURRENT_PROD")
    args = parser.parse_args()
    asyncio.run(main(args.base_url, args.workers, args.adds, args.product_id))
