from __future__ import annotations

import asyncio
import logging
import random
from functools import partial

from pledge import Options, Outcome, Promise, Trace, Workload

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


async def lookup(name: str, latency: float) -> str:
    await asyncio.sleep(latency)
    if name == "mirror-c":
        raise ConnectionError(f"{name} refused the connection")
    return f"{name} answered after {latency:.2f}s"


async def main() -> None:
    latencies = {name: random.uniform(0.05, 0.4) for name in ("mirror-a", "mirror-b", "mirror-c")}
    workloads = [
        Workload(partial(lookup, name, latency), fallback=f"{name} (cached)")
        for name, latency in latencies.items()
    ]

    trace = Trace()
    promise = Promise(Options(timeout=0.2, race_index=True), trace=trace)

    print("all_settled:")
    for result in await promise.all_settled(workloads):
        print(f"  [{result.idx}] {result.outcome.kind}: {result.payload}")

    winner = await promise.race(workloads)
    print(f"race: [{winner.idx}] {winner.payload}")

    print("any:", [r.payload for r in await promise.any(workloads)])

    # A failure fallback keeps a timed-out mirror from counting as a success
    strict = [Workload(w.command, fallback=Outcome.Failure(TimeoutError("too slow"))) for w in workloads[:2]]
    print("race_all:", [r.payload for r in await promise.race_all(strict)])

    await promise.drain()
    print(f"trace recorded {len(trace)} events")


if __name__ == "__main__":
    asyncio.run(main())
