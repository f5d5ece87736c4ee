"""Render a document tree back to markup."""

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter


class OrderPreservingFormatter(HTMLFormatter):
    """HTML formatter that writes attributes in tree order instead of sorting them."""

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return [
            (name, None if self.empty_attributes_are_booleans and value == "" else value)
            for name, value in tag.attrs.items()
        ]


FORMATTERS = {
    "minimal": OrderPreservingFormatter(entity_substitution=EntitySubstitution.substitute_xml),
    "html": OrderPreservingFormatter(entity_substitution=EntitySubstitution.substitute_html),
    "html5": OrderPreservingFormatter(
        entity_substitution=EntitySubstitution.substitute_html,
        void_element_close_prefix=None,
        empty_attributes_are_booleans=True,
    ),
}


def serialize(tree: BeautifulSoup, formatter: str = "minimal") -> str:
    """Serialize the tree as it currently stands, without reformatting."""
    return tree.decode(formatter=FORMATTERS[formatter])
