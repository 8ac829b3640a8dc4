"""File-based templates -- the most common real-world pattern.

Loads templates from disk with FileSystemLoader. Shared page chrome lives
in partials (``header.mustache``, ``footer.mustache``) found by name in the
same directory.

Run:
    python app.py
"""

from pathlib import Path

from stache import Environment, FileSystemLoader

templates_dir = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(templates_dir))

site = {
    "site_name": "My Site",
    "nav_items": [
        {"url": "/", "label": "Home"},
        {"url": "/about", "label": "About"},
    ],
}

home_template = env.get_template("home")
about_template = env.get_template("about")

home_output = home_template.render(
    site,
    title="Welcome",
    message="This is a stache-powered site built from partials.",
)

about_output = about_template.render(
    site,
    title="About Us",
    description="Built with stache, logic-less templates for Python.",
    team=[],
)


def main() -> None:
    print("=== Home Page ===")
    print(home_output)
    print()
    print("=== About Page ===")
    print(about_output)


if __name__ == "__main__":
    main()
