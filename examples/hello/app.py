"""Hello World -- the simplest stache example.

Parse a template from a string and render it against a view.
No templates directory needed.

Run:
    python app.py
"""

import stache
from stache import Environment

env = Environment()

# Parse once
template = env.from_string("Hello, {{name}}!")

# Render with a view
output = template.render({"name": "World"})

# One-off render without keeping a template around
quick = stache.render("Hello {{planet}}", {"planet": "World"})


def main() -> None:
    print(output)
    print(quick)
    print()

    # Keyword arguments work as a view too
    for name in ["Stache", "Mustache", "Python"]:
        print(template.render(name=name))


if __name__ == "__main__":
    main()
