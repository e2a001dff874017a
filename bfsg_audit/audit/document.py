# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Read-only document access for the analyzers.

This module wraps a BeautifulSoup tree so analyzers can select elements with
structural predicates, look elements up by id and order findings by document
position. The tree is never modified during analysis.
"""

from typing import Callable, Dict, Iterable, List, Optional, Union

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from bfsg_audit.utils.logging_helper import DocumentError, setup_logger

# Set up module-level logger
logger = setup_logger(__name__)

Predicate = Callable[[Tag], bool]
TagNames = Union[str, Iterable[str], None]


class HtmlDocument:
    """A parsed HTML document with a pre-order element index."""

    def __init__(self, soup: Tag):
        """
        Index the given tree.

        Args:
            soup: BeautifulSoup object (or any Tag used as the document root)

        Raises:
            DocumentError: If the root is not a traversable element
        """
        if not isinstance(soup, Tag):
            raise DocumentError(
                f"Cannot analyze document of type {type(soup).__name__}"
            )

        self.soup = soup

        elements: List[Tag] = [] if isinstance(soup, BeautifulSoup) else [soup]
        elements.extend(soup.find_all(True))
        self._elements = tuple(elements)
        self._positions = {id(element): index for index, element in enumerate(elements)}

        self._ids: Dict[str, Tag] = {}
        for element in elements:
            element_id = get_attribute(element, "id")
            if element_id and element_id not in self._ids:
                self._ids[element_id] = element

    def __len__(self) -> int:
        return len(self._elements)

    @property
    def elements(self) -> List[Tag]:
        """All elements in document order."""
        return list(self._elements)

    def select(self, names: TagNames = None, predicate: Optional[Predicate] = None) -> List[Tag]:
        """
        Select all elements matching a tag name set and/or a predicate.

        Args:
            names: Tag name or names to match, None for any element
            predicate: Optional function returning True for wanted elements

        Returns:
            Matching elements in document order
        """
        wanted = _as_name_set(names)
        return [
            element
            for element in self._elements
            if (wanted is None or element.name in wanted)
            and (predicate is None or predicate(element))
        ]

    def select_within(
        self,
        ancestor: Tag,
        names: TagNames = None,
        predicate: Optional[Predicate] = None,
        limit: Optional[int] = None,
    ) -> List[Tag]:
        """Select descendants of ``ancestor`` in document order."""
        wanted = _as_name_set(names)
        matches = []
        for element in ancestor.find_all(True):
            if (wanted is None or element.name in wanted) and (
                predicate is None or predicate(element)
            ):
                matches.append(element)
                if limit is not None and len(matches) >= limit:
                    break
        return matches

    def find(self, names: TagNames = None, predicate: Optional[Predicate] = None) -> Optional[Tag]:
        """Return the first element matching ``names`` and ``predicate``."""
        wanted = _as_name_set(names)
        for element in self._elements:
            if (wanted is None or element.name in wanted) and (
                predicate is None or predicate(element)
            ):
                return element
        return None

    def element_by_id(self, element_id: str) -> Optional[Tag]:
        """Return the first element carrying the given id."""
        return self._ids.get(element_id)

    def has_id(self, element_id: str) -> bool:
        return element_id in self._ids

    def position(self, element: Tag) -> int:
        """
        Pre-order position of an element.

        Raises:
            DocumentError: If the element does not belong to this document
        """
        try:
            return self._positions[id(element)]
        except KeyError:
            raise DocumentError(
                f"Element <{getattr(element, 'name', '?')}> is not part of this document"
            ) from None


def _as_name_set(names: TagNames) -> Optional[frozenset]:
    if names is None:
        return None
    if isinstance(names, str):
        return frozenset((names,))
    return frozenset(names)


def parse_html(markup: Union[str, bytes]) -> BeautifulSoup:
    """
    Parse HTML markup.

    Every attribute value is kept as a plain string, including ``class`` and
    ``rel``.
    """
    return BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)


def load_document(source) -> HtmlDocument:
    """
    Build an HtmlDocument from markup, a BeautifulSoup tree or a document.

    Args:
        source: HTML string/bytes, BeautifulSoup object, Tag or HtmlDocument

    Returns:
        HtmlDocument ready for analysis

    Raises:
        DocumentError: If the source cannot be turned into a document
    """
    if isinstance(source, HtmlDocument):
        return source
    if isinstance(source, Tag):
        return HtmlDocument(source)
    if isinstance(source, (str, bytes)):
        logger.debug("Parsing %d characters of HTML", len(source))
        return HtmlDocument(parse_html(source))
    if source is None:
        raise DocumentError("No document provided")
    raise DocumentError(f"Cannot analyze document of type {type(source).__name__}")


def get_attribute(element: Tag, attribute: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get the value of an attribute as a string.

    Args:
        element: BeautifulSoup Tag object
        attribute: Name of the attribute
        default: Value returned when the attribute is absent

    Returns:
        Value of the attribute, or ``default`` if not present
    """
    value = element.get(attribute)
    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        # Trees parsed with bs4's default multi-valued attributes
        return " ".join(value)
    return value


def has_attribute(element: Tag, attribute: str) -> bool:
    return element.has_attr(attribute)


def get_element_text(element: Tag) -> str:
    """Concatenated text of all descendants, whitespace preserved."""
    return element.get_text()


def has_direct_text(element: Tag) -> bool:
    """True if the element has at least one text node as a direct child."""
    return any(
        isinstance(child, NavigableString) and not isinstance(child, Comment)
        for child in element.children
    )


def has_child_elements(element: Tag) -> bool:
    return any(isinstance(child, Tag) for child in element.children)


def truncate(text: str, length: int = 50) -> str:
    return text[:length]
