"""
Feed Service Module

Builds the RSS 2.0 document served for a saved search. Items are numbered in
the order they are given, which is the sorted search order, and use the object
key as their guid so feed readers can deduplicate across refreshes even though
the signed enclosure URLs change on every fetch.
"""

import logging
import re
from typing import Iterable
from xml.etree.ElementTree import Element, SubElement, tostring

from dircast.models import FileObject

logger = logging.getLogger(__name__)

RSS_MIME_TYPE = "application/rss+xml"
DEFAULT_ENCLOSURE_TYPE = "audio/mpeg"

# Characters XML 1.0 does not allow anywhere in a document
_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_safe(text: str) -> str:
    return _XML_ILLEGAL.sub("", text)


def feed_link(public_base_url: str, slug: str) -> str:
    return f"{public_base_url.rstrip('/')}/gen_feed/{slug}/feed.rss"


def build_feed_tree(title: str, author: str, public_base_url: str, items: Iterable[FileObject]) -> Element:
    rss = Element("rss")
    rss.set("version", "2.0")
    channel = SubElement(rss, "channel")
    title = xml_safe(title)
    author = xml_safe(author)
    public_base_url = xml_safe(public_base_url)
    SubElement(channel, "title").text = title

    for index, obj in enumerate(items, start=1):
        item = SubElement(channel, "item")
        SubElement(item, "title").text = f"{title} {index}"
        SubElement(item, "link").text = public_base_url
        SubElement(item, "author").text = author

        enclosure = SubElement(item, "enclosure")
        enclosure.set("url", xml_safe(obj.signed_url))
        enclosure.set("length", str(obj.size_bytes))
        enclosure.set("type", xml_safe(obj.mime_type or DEFAULT_ENCLOSURE_TYPE))

        guid = SubElement(item, "guid")
        guid.set("isPermaLink", "false")
        guid.text = xml_safe(obj.key)

    return rss


def assemble(title: str, author: str, public_base_url: str, items: Iterable[FileObject]) -> str:
    """
    Render a feed document for an ordered set of objects.

    Args:
        title: Channel title, also the stem of every item title
        author: Author shown on every item
        public_base_url: Link used for every item
        items: Objects in feed order

    Returns:
        Serialized RSS XML, with declaration
    """
    rss = build_feed_tree(title, author, public_base_url, items)
    body = tostring(rss, encoding="unicode")
    logger.debug("Assembled feed %r with %d items", title, len(rss.find("channel").findall("item")))
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body
