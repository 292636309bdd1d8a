"""Hello World -- the simplest lightrender example.

Build a document from nodes and render it to a complete HTML page.
No templates, no client script.

Run:
    python app.py
"""

from lightrender import Runtime, create_document

runtime = Runtime()

doc = create_document(runtime=runtime)
doc.title("Hello")
doc.use(doc.create("h1").text("Hello, World!"))

# render() returns the page and recycles the nodes
output = doc.render()


def greet(name: str) -> str:
    """Render a fresh page for ``name``."""
    page = create_document(runtime=runtime)
    page.use(page.create("h1").text(f"Hello, {name}!"))
    return page.render()


def main() -> None:
    print(output)
    print()

    # The same runtime serves many documents
    for name in ["LightRender", "<Bengal>", "Python"]:
        print(greet(name))


if __name__ == "__main__":
    main()
