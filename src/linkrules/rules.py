"""Link rules and their compilation into a rule chain.

A rule comes in one of three shapes:

- `BuiltinRule("external")`, or just the name as a string: one of the
  ready-made rules in `BUILTIN_RULES`.
- `MatcherRule(match, action)`: a match function plus one or more actions.
- `TransformRule(func)`, or just a callable: a function from `MarkdownLink`
  to `Link` (or None to skip).

`compile_rules()` turns a list of rules into a tuple of plain functions, each
taking a `MarkdownLink` and returning a `Link` or None. Compilation happens
once; the resulting chain is never inspected for shape again.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .actions import merge_class
from .link import Link, MarkdownLink
from .match import LinkMatcher, download, external, same_page

LinkPatch = Link | Mapping[str, Any]
Action = LinkPatch | Callable[[Link], LinkPatch | None]
TransformFunc = Callable[[MarkdownLink], LinkPatch | bool | None]
CompiledRule = Callable[[MarkdownLink], Link | None]


class RuleConfigError(ValueError):
    """Raised at setup when a rule list names a builtin that does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Builtin rule '{name}' unknown")


@dataclass(frozen=True, slots=True)
class BuiltinRule:
    name: str

    def __init__(self, name: str) -> None:
        object.__setattr__(self, "name", str(name))


@dataclass(frozen=True, slots=True)
class MatcherRule:
    """Run `action` on links accepted by `match`.

    `match` returns a falsy value to skip, True to accept, or a patch that is
    merged over the link before the actions run. `action` is a single action
    or a sequence; each action is a static patch or a function of the link.
    """

    match: LinkMatcher
    action: tuple[Action, ...]

    def __init__(self, match: LinkMatcher, action: Action | Sequence[Action]) -> None:
        if callable(action) or isinstance(action, (Link, Mapping)):
            actions: tuple[Action, ...] = (action,)
        else:
            actions = tuple(action)
        object.__setattr__(self, "match", match)
        object.__setattr__(self, "action", actions)


@dataclass(frozen=True, slots=True)
class TransformRule:
    func: TransformFunc


Rule = BuiltinRule | MatcherRule | TransformRule
RuleSpec = Rule | str | TransformFunc


# -----------------
# Builtin rules
# -----------------


def _external_rule() -> MatcherRule:
    return MatcherRule(
        external(),
        [
            {"target": "_blank", "rel": "external nofollow noopener"},
            merge_class("external"),
        ],
    )


def _download_rule() -> MatcherRule:
    return MatcherRule(
        download(),
        [
            merge_class("download"),
            lambda link: {"download": link.download or True},
        ],
    )


def _same_page_rule() -> MatcherRule:
    return MatcherRule(same_page(), merge_class("same-page"))


BUILTIN_RULES: Mapping[str, Callable[[], MatcherRule]] = {
    "external": _external_rule,
    "download": _download_rule,
    "same-page": _same_page_rule,
}


# -----------------
# Compilation
# -----------------


def as_rule(spec: RuleSpec) -> Rule:
    """Tag shorthand rule specs (names, bare callables) with their variant."""

    if isinstance(spec, (BuiltinRule, MatcherRule, TransformRule)):
        return spec
    if isinstance(spec, str):
        return BuiltinRule(spec)
    if callable(spec):
        return TransformRule(spec)
    raise TypeError(f"Unsupported link rule: {type(spec).__name__}")


def _to_link(result: Any) -> Link | None:
    if isinstance(result, Link):
        return result
    if isinstance(result, Mapping):
        return Link.from_mapping(result)
    if result is True:
        # Accepted with nothing to write.
        return Link()
    if not result:
        return None
    raise TypeError(f"Link transform returned unsupported value: {type(result).__name__}")


def _compile_matcher(rule: MatcherRule) -> CompiledRule:
    match = rule.match
    actions = rule.action

    def _apply(md: MarkdownLink) -> Link | None:
        result = match(md)
        if isinstance(result, (Link, Mapping)):
            link = Link.from_markdown(md).merge(result)
        elif result:
            link = Link.from_markdown(md)
        else:
            return None

        for action in actions:
            if not callable(action):
                link = link.merge(action)
                continue
            patch = action(link)
            if isinstance(patch, Link):
                link = patch
            elif patch is not None:
                link = link.merge(patch)
        return link

    return _apply


def _compile_transform(rule: TransformRule) -> CompiledRule:
    func = rule.func

    def _apply(md: MarkdownLink) -> Link | None:
        return _to_link(func(md))

    return _apply


def normalize_rule(
    rule: RuleSpec,
    builtins: Mapping[str, Callable[[], MatcherRule]] = BUILTIN_RULES,
) -> CompiledRule:
    """Compile one rule of any shape into a `MarkdownLink -> Link | None` function.

    Raises `RuleConfigError` for an unknown builtin name.
    """

    rule = as_rule(rule)
    if isinstance(rule, BuiltinRule):
        factory = builtins.get(rule.name)
        if factory is None:
            raise RuleConfigError(rule.name)
        rule = factory()
    if isinstance(rule, MatcherRule):
        return _compile_matcher(rule)
    return _compile_transform(rule)


def resolve_rules(
    rules: Sequence[RuleSpec],
    *,
    use_builtin: bool = True,
    builtins: Mapping[str, Callable[[], MatcherRule]] = BUILTIN_RULES,
) -> tuple[Rule, ...]:
    """Tag `rules` and append the builtins they do not already name.

    Caller rules keep their order and run first; missing builtins follow in
    table order. A caller rule naming a builtin replaces the automatic one.
    """

    resolved = [as_rule(r) for r in rules]
    if use_builtin:
        named = {r.name for r in resolved if isinstance(r, BuiltinRule)}
        resolved.extend(BuiltinRule(name) for name in builtins if name not in named)
    return tuple(resolved)


def compile_rules(
    rules: Sequence[RuleSpec],
    *,
    use_builtin: bool = True,
    builtins: Mapping[str, Callable[[], MatcherRule]] = BUILTIN_RULES,
) -> tuple[CompiledRule, ...]:
    resolved = resolve_rules(rules, use_builtin=use_builtin, builtins=builtins)
    return tuple(normalize_rule(r, builtins) for r in resolved)
