"""Response caching -- warmup, cache hits and single-flight rendering.

Pages are rendered once and served from the runtime's LRU response cache.
Concurrent requests for a missing key share one render.

Run:
    python app.py
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from lightrender import RenderConfig, Runtime, create_document, warmup

runtime = Runtime(RenderConfig(cache_limit=100))
cache = runtime.cache

# Mutable counter to prove caching works
build_count = 0
_count_lock = threading.Lock()


def build_page(title: str):
    """Builder factory: each call to the builder renders a fresh document."""

    def build():
        global build_count  # noqa: PLW0603
        with _count_lock:
            build_count += 1
        time.sleep(0.01)  # simulate slow data access
        doc = create_document(runtime=runtime)
        doc.title(title)
        doc.use(doc.create("h1").text(title))
        return doc

    return build


# Eager population at startup
warmup_results = warmup(
    [
        {"key": "home", "builder": build_page("Home")},
        {"key": "about", "builder": build_page("About")},
    ],
    runtime=runtime,
)
count_after_warmup = build_count

# Served from cache -- the builder is not called
home = cache.render_with_cache("home", build_page("Home"))
count_after_hit = build_count

# Eight concurrent misses for the same key -- one render
with ThreadPoolExecutor(max_workers=8) as pool:
    blog_pages = list(
        pool.map(lambda _: cache.render_with_cache("blog", build_page("Blog")), range(8))
    )
count_after_burst = build_count

stats = cache.stats()


def main() -> None:
    for result in warmup_results:
        print(result.to_dict())
    print(f"\nbuilders called after warmup: {count_after_warmup}")
    print(f"builders called after cache hit: {count_after_hit}")
    print(f"builders called after 8 concurrent misses: {count_after_burst}")
    print(f"\ncache stats: {stats}")


if __name__ == "__main__":
    main()
