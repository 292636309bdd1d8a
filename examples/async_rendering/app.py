"""Async rendering -- single-flight caching from coroutines.

Ten concurrent requests for the same page await one shared render. The
builder is a coroutine; it may also return a Document or finished HTML
directly.

Run:
    python app.py
"""

import asyncio

from lightrender import Runtime, create_document

runtime = Runtime()

calls = 0


async def fetch_features() -> list[str]:
    """Simulate an async data source."""
    await asyncio.sleep(0.01)
    return ["Pooled nodes", "Single-flight caching", "Client hydration"]


async def build_features():
    global calls  # noqa: PLW0603
    calls += 1
    features = await fetch_features()
    doc = create_document(runtime=runtime)
    doc.title("Features")
    items = doc.create("ol")
    for number, feature in enumerate(features, 1):
        items.append(doc.create("li").text(f"#{number}: {feature}"))
    doc.use(doc.create("h1").text("LightRender Features"), items)
    doc.use(doc.create("p").text(f"Total: {len(features)} features"))
    return doc


async def serve(requests: int) -> list[str]:
    cache = runtime.cache
    return await asyncio.gather(
        *(cache.render_with_cache_async("features", build_features) for _ in range(requests))
    )


responses = asyncio.run(serve(10))
output = responses[0]


def main() -> None:
    print(output)
    print(f"\n{len(responses)} responses, builder called {calls} time(s)")


if __name__ == "__main__":
    main()
