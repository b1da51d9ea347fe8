import asyncio
import json
import logging
from datetime import datetime, timedelta

import ftx
from ftx import Endpoints


logging.basicConfig(level=logging.DEBUG)

with open("account.json", "r") as fp:
    cfg = json.load(fp)

cfg["endpoint"] = Endpoints.MAINNET


async def main():

    async with ftx.Client(config=cfg) as client:
        book = await client.get_orderbook(market_name="BTC/USD", depth=20)
        print(book["result"]["bids"][:5])

        # Mark price candles for the past day, hourly
        start = datetime.now() - timedelta(days=1)

        candles = await client.get_historical_prices(
            future_name="BTC-PERP", resolution=3600, limit=24, start_time=start
        )
        print(candles["result"])


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("Exiting...")
