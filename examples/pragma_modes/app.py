"""Pragmas -- per-template rendering modes.

{{%DOT-NOTATION}} lets ``{{user.address.city}}`` walk nested values.
{{%UNESCAPED}} makes ``{{x}}`` raw and ``{{{x}}}`` escaped.
A pragma tag and the newline right after it produce no output.

Run:
    python app.py
"""

from stache import Environment

env = Environment()

dotted = env.from_string("""\
{{%DOT-NOTATION}}
{{user.name}} lives in {{user.address.city}}.
""")

dotted_output = dotted.render(
    user={"name": "Ana", "address": {"city": "Lisbon"}},
)

unescaped = env.from_string("{{%UNESCAPED}}{{html}} vs {{{html}}}")
unescaped_output = unescaped.render(html="<b>hi</b>")


def main() -> None:
    print(dotted_output)
    print(unescaped_output)
    print("Declared pragmas:", dict(dotted.pragmas))


if __name__ == "__main__":
    main()
