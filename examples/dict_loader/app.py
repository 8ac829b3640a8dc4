"""DictLoader -- in-memory templates and partials without filesystem.

Templates from a dictionary. No templates directory needed.
``{{>nav}}`` is looked up as ``nav.mustache`` in the same loader.
Use case: tests, generated templates, single-file apps.

Run:
    python app.py
"""

from stache import DictLoader, Environment

templates = {
    "page.mustache": """\
<!DOCTYPE html>
<html>
<head><title>{{title}}</title></head>
<body>
    {{>nav}}
    <main>
        <h1>{{heading}}</h1>
        <p>{{message}}</p>
    </main>
</body>
</html>
""",
    "nav.mustache": """\
<nav>{{#nav_items}}<a href="{{url}}">{{label}}</a>{{/nav_items}}</nav>""",
}

env = Environment(loader=DictLoader(templates))
template = env.get_template("page")

output = template.render(
    title="DictLoader Demo",
    nav_items=[
        {"url": "/", "label": "Home"},
        {"url": "/about", "label": "About"},
    ],
    heading="In-Memory Templates",
    message="No filesystem required. Templates loaded from a dict.",
)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
