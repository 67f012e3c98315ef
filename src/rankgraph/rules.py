"""Display-rule evaluation.

A rule token is split on ``|`` and dispatched on its first part through the
matcher families basic, special and post-type, in that order. The first
family that claims the token decides the outcome. Nothing here raises: an
unrecognized token simply does not match.
"""
from __future__ import annotations

from rankgraph.models import PageContext, PageKind, SchemaDefinition

_POST_TYPE_SPECIFICS = {"post", "page", "product"}


def matches(rule: str, ctx: PageContext) -> bool:
    """Return True if the rule token matches the current page."""
    parts = rule.strip().split("|")
    rule_type = parts[0]

    result = _check_basic_rules(rule_type, ctx)
    if result is not None:
        return result

    result = _check_special_rules(rule_type, ctx)
    if result is not None:
        return result

    return _check_post_type_rules(rule_type, parts, ctx)


def matches_specific(token: str, ctx: PageContext) -> bool:
    """Return True if a specific entity reference (``post-42``, ``tax-7-single-category``) matches."""
    parts = token.strip().split("-")
    if len(parts) < 2:
        return False

    kind = parts[0]
    try:
        object_id = int(parts[1])
    except ValueError:
        return False

    if kind in _POST_TYPE_SPECIFICS:
        return ctx.page.is_singular and ctx.page.object_id == object_id

    if kind == "tax":
        if len(parts) > 2 and parts[2] == "single":
            taxonomy = "-".join(parts[3:]) or None
            return ctx.page.is_singular and ctx.has_term(object_id, taxonomy)
        return ctx.kind == PageKind.TERM_ARCHIVE and ctx.page.object_id == object_id

    return False


def evaluate_rules(rules: list[str], ctx: PageContext) -> bool:
    return any(matches(rule, ctx) for rule in rules)


def evaluate_specifics(specifics: list[str], ctx: PageContext) -> bool:
    return any(matches_specific(token, ctx) for token in specifics)


def is_visible(definition: SchemaDefinition, ctx: PageContext) -> bool:
    """Decide whether a schema instance shows on the current page.

    Visible when any ``show_on`` rule or specific matches and no
    ``not_show_on`` rule or specific does. A schema with no rules at all is
    never visible.
    """
    show_on = definition.show_on
    not_show_on = definition.not_show_on

    if show_on.is_empty and not_show_on.is_empty:
        return False

    show = evaluate_rules(show_on.rules, ctx) or evaluate_specifics(show_on.specific_ids, ctx)
    if not show:
        return False

    suppress = evaluate_rules(not_show_on.rules, ctx) or evaluate_specifics(not_show_on.specific_ids, ctx)
    return not suppress


# ---------------------------------------------------------------------------
# Matcher families
# ---------------------------------------------------------------------------

def _check_basic_rules(rule_type: str, ctx: PageContext) -> bool | None:
    if rule_type == "basic-global":
        return True
    if rule_type == "basic-singulars":
        return ctx.page.is_singular
    if rule_type == "basic-archives":
        return ctx.page.is_archive
    return None


def _check_special_rules(rule_type: str, ctx: PageContext) -> bool | None:
    page = ctx.page
    if rule_type == "special-404":
        return page.kind == PageKind.NOT_FOUND
    if rule_type == "special-search":
        return page.kind == PageKind.SEARCH
    if rule_type == "special-blog":
        return page.kind == PageKind.BLOG
    if rule_type == "special-front":
        return page.is_front_page
    if rule_type == "special-date":
        return page.kind == PageKind.DATE_ARCHIVE
    if rule_type == "special-author":
        return page.kind == PageKind.AUTHOR_ARCHIVE
    if rule_type == "special-woo-shop":
        return _is_post_type_archive(ctx, "product")
    return None


def _check_post_type_rules(rule_type: str, parts: list[str], ctx: PageContext) -> bool:
    if rule_type == "post":
        return _handle_post_type_rules(parts, ctx, "post")
    if rule_type == "page":
        return _handle_page_rules(parts, ctx)
    if rule_type == "product-type":
        return _handle_product_type_rules(parts, ctx)
    if rule_type == "product":
        return _handle_post_type_rules(parts, ctx, "product")
    if rule_type in ctx.post_types:
        return _handle_post_type_rules(parts, ctx, rule_type)
    return False


def _handle_page_rules(parts: list[str], ctx: PageContext) -> bool:
    selector = parts[1] if len(parts) > 1 else ""
    if selector == "all":
        return _is_singular(ctx, "page")
    if selector == "front":
        return ctx.page.is_front_page
    return False


def _handle_product_type_rules(parts: list[str], ctx: PageContext) -> bool:
    wanted = parts[1] if len(parts) > 1 else ""
    if not wanted or not _is_singular(ctx, "product"):
        return False
    return ctx.product_type == wanted


def _handle_post_type_rules(parts: list[str], ctx: PageContext, post_type: str) -> bool:
    selector = parts[1] if len(parts) > 1 else ""

    if selector == "archive":
        return _is_post_type_archive(ctx, post_type)
    if selector != "all":
        return False

    scope = parts[2] if len(parts) > 2 else ""
    if scope == "archive":
        return _is_post_type_archive(ctx, post_type)
    if scope == "taxarchive":
        taxonomy = parts[3] if len(parts) > 3 else ""
        return bool(taxonomy) and ctx.kind == PageKind.TERM_ARCHIVE and ctx.page.taxonomy == taxonomy
    if scope:
        return False
    return _is_singular(ctx, post_type)


def _is_singular(ctx: PageContext, post_type: str) -> bool:
    return ctx.page.is_singular and ctx.page.post_type == post_type


def _is_post_type_archive(ctx: PageContext, post_type: str) -> bool:
    return ctx.kind == PageKind.POST_TYPE_ARCHIVE and ctx.page.post_type == post_type
