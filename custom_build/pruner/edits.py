"""Apply the source edits queued by environment rules."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from custom_build.locator import indent_of, locate_fork, locate_function, reindent, remove_fork
from custom_build.pruner.support import inline_support_prop, remove_support_prop, replace_support_prop
from custom_build.rules.edits import (
    InsertAfter,
    PromoteFork,
    Rewrite,
    SourceEdit,
    Substitute,
    SupportFlag,
    Transplant,
)

logger = logging.getLogger(__name__)


def replace_function(source: str, name: str, body: str) -> str:
    """Swap the declaration of name for body, shifted to the declaration's indent."""
    span = locate_function(source, name)
    if span is None:
        return source
    replacement = reindent(body, indent_of(span.text))
    return source[:span.start] + replacement + source[span.end:]


def rewrite(source: str, edit: Rewrite) -> str:
    if edit.within is None:
        return re.sub(edit.pattern, edit.replacement, source, count=edit.count, flags=edit.flags)

    span = locate_function(source, edit.within)
    if span is None:
        return source
    modified = re.sub(edit.pattern, edit.replacement, span.text, count=edit.count, flags=edit.flags)
    return source[:span.start] + modified + source[span.end:]


def transplant(source: str, name: str, donor: str) -> str:
    """Make the declaration of name use donor's implementation as its value."""
    target = locate_function(source, name)
    donor_span = locate_function(source, donor)
    if target is None or donor_span is None:
        logger.debug("cannot transplant %s into %s", donor, name)
        return source

    text = donor_span.text
    if re.match(r" *function\b", text):
        value = re.sub(r"^ *function +\w+", "function", text, count=1).rstrip() + ";\n"
    else:
        value = re.sub(r"^ *var +\w+ *= *", "", text, count=1)

    head = re.match(r" *var +\w+ *= *", target.text)
    prefix = head.group(0) if head else indent_of(target.text) + "var " + name + " = "
    return source[:target.start] + prefix + value + source[target.end:]


def promote_fork(source: str, fork: str) -> str:
    """Replace a function body with the body its fallback fork assigns, then drop the fork."""
    fork_span = locate_fork(source, fork)
    if fork_span is None:
        return source
    match = re.search(re.escape(fork) + r" *= *function([\s\S]+?\n *\});", fork_span.text)
    target = locate_function(source, fork)
    if match is None or target is None:
        logger.debug("fork %s has no promotable body", fork)
        return source

    head = re.match(r"[\s\S]*?function +" + re.escape(fork), target.text)
    if head is None:
        return source
    body = re.sub(r"^  ", "", match.group(1), flags=re.M) + "\n"
    source = source[:target.start] + head.group(0) + body + source[target.end:]
    return remove_fork(source, fork)


def insert_after(source: str, anchor: str, text: str) -> str:
    span = locate_function(source, anchor)
    if span is None:
        return source
    addition = "\n" + reindent(text, indent_of(span.text))
    return source[:span.end] + addition + source[span.end:]


def apply_support_flag(source: str, edit: SupportFlag) -> str:
    if edit.value is None:
        return remove_support_prop(source, edit.flag)
    if edit.inline:
        return inline_support_prop(source, edit.flag, edit.value)
    return replace_support_prop(source, edit.flag, edit.value)


def apply_edit(source: str, edit: SourceEdit) -> str:
    if isinstance(edit, Substitute):
        return replace_function(source, edit.name, edit.body)
    if isinstance(edit, Rewrite):
        return rewrite(source, edit)
    if isinstance(edit, SupportFlag):
        return apply_support_flag(source, edit)
    if isinstance(edit, Transplant):
        return transplant(source, edit.name, edit.donor)
    if isinstance(edit, PromoteFork):
        return promote_fork(source, edit.fork)
    if isinstance(edit, InsertAfter):
        return insert_after(source, edit.anchor, edit.text)
    raise TypeError(f"Unsupported source edit: {edit!r}")


def apply_edits(source: str, edits: Iterable[SourceEdit]) -> str:
    """Apply edits in the order they were queued."""
    for edit in edits:
        updated = apply_edit(source, edit)
        if updated == source:
            logger.debug("edit had no effect: %r", edit)
        source = updated
    return source
