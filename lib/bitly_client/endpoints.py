from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable

DEFAULT_UNIT = "day"
DEFAULT_TIMEZONE = "America/New_York"


@dataclass(frozen=True)
class Param:
    """One endpoint argument.

    ``default`` of ``None`` means the parameter is left off the wire unless
    the caller passes a value.
    """

    name: str
    required: bool = False
    default: Any = None


def req(name: str) -> Param:
    return Param(name, required=True)


def opt(name: str, default: Any = None) -> Param:
    return Param(name, default=default)


def metrics(*, rollup: bool = True, limit: int = 100) -> tuple[Param, ...]:
    """Shared parameters of the time-series metric endpoints."""
    params = [
        opt("unit", DEFAULT_UNIT),
        opt("units"),
        opt("timezone", DEFAULT_TIMEZONE),
    ]
    if rollup:
        params.append(opt("rollup"))
    params.extend([opt("limit", limit), opt("unit_reference_ts", "now")])
    return tuple(params)


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true"}
    return bool(value)


@dataclass(frozen=True)
class Endpoint:
    name: str
    path: str
    params: tuple[Param, ...] = ()
    unwrap: tuple[str | int, ...] = ()
    transform: Callable[[Any], Any] | None = None
    post: bool = False
    expect_json: bool = True
    doc: str | None = None
    _signature: inspect.Signature = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        parameters = []
        for p in self.params:
            if p.required:
                parameters.append(inspect.Parameter(p.name, inspect.Parameter.POSITIONAL_OR_KEYWORD))
            else:
                parameters.append(inspect.Parameter(p.name, inspect.Parameter.KEYWORD_ONLY, default=p.default))
        object.__setattr__(self, "_signature", inspect.Signature(parameters))

    @property
    def signature(self) -> inspect.Signature:
        return self._signature

    def build_params(self, args: tuple, kwargs: dict[str, Any]) -> dict[str, Any]:
        """Bind call arguments into a wire parameter mapping.

        Raises ``TypeError`` for missing or unexpected arguments, like any
        other Python callable.
        """
        bound = self._signature.bind(*args, **kwargs)
        params: dict[str, Any] = {}
        for p in self.params:
            value = bound.arguments.get(p.name)
            if value is None:
                value = p.default
            if value is None:
                continue
            params[p.name] = value
        return params

    def extract(self, data: Any) -> Any:
        for step in self.unwrap:
            data = data[step]
        if self.transform is not None:
            data = self.transform(data)
        return data


def _link(name: str, path: str, *extra: Param, unwrap: tuple[str | int, ...] = (), doc: str | None = None) -> Endpoint:
    return Endpoint(name, path, (req("link"), *extra), unwrap=unwrap, doc=doc)


def _bundle(name: str, path: str, *extra: Param, unwrap: tuple[str | int, ...] = ("bundle",)) -> Endpoint:
    return Endpoint(name, path, (req("bundle_link"), *extra), unwrap=unwrap)


_USER_METRICS = (
    "clicks",
    "countries",
    "popular_earned_by_clicks",
    "popular_earned_by_shortens",
    "popular_links",
    "popular_owned_by_clicks",
    "popular_owned_by_shortens",
    "referrers",
    "referring_domains",
    "share_counts",
    "share_counts_by_share_type",
    "shorten_counts",
)


ENDPOINTS: tuple[Endpoint, ...] = (
    # links
    Endpoint("link_lookup", "v3/link/lookup", (req("url"),), unwrap=("link_lookup", 0),
             doc="Find the bitly link for a long URL."),
    Endpoint("user_link_lookup", "v3/user/link_lookup", (req("url"),), unwrap=("link_lookup", 0),
             doc="Find the authenticated user's bitly link for a long URL."),
    Endpoint("user_save_custom_domain_keyword", "v3/user/save_custom_domain_keyword",
             (req("keyword_link"), req("target_link"), opt("overwrite"))),
    Endpoint("highvalue", "v3/highvalue", (req("limit"),), unwrap=("values",)),
    Endpoint("realtime_bursting_phrases", "v3/realtime/bursting_phrases"),
    Endpoint("realtime_hot_phrases", "v3/realtime/hot_phrases"),
    Endpoint("realtime_clickrate", "v3/realtime/clickrate", (req("phrase"),)),
    _link("link_info", "v3/link/info"),
    _link("link_content", "v3/link/content", opt("content_type")),
    _link("link_category", "v3/link/category", unwrap=("categories",)),
    _link("link_social", "v3/link/social", unwrap=("social_scores",)),
    _link("link_location", "v3/link/location", unwrap=("locations",)),
    _link("link_language", "v3/link/language", unwrap=("languages",)),
    # link metrics
    _link("link_clicks", "v3/link/clicks", *metrics(), doc="Click counts for a single link."),
    _link("link_shares", "v3/link/shares", *metrics()),
    _link("link_countries", "v3/link/countries", *metrics(rollup=False)),
    _link("link_referrers", "v3/link/referrers", *metrics(rollup=False)),
    _link("link_referrers_by_domain", "v3/link/referrers_by_domain", *metrics(rollup=False)),
    _link("link_referring_domains", "v3/link/referring_domains", *metrics(rollup=False)),
    _link("link_encoders", "v3/link/encoders", opt("my_network"), opt("limit", 10), opt("expand_user")),
    _link("link_encoders_count", "v3/link/encoders_count"),
    # user metrics
    *(Endpoint(f"user_{metric}", f"v3/user/{metric}", metrics()) for metric in _USER_METRICS),
    Endpoint("user_tracking_domain_list", "v3/user/tracking_domain_list", unwrap=("tracking_domains",)),
    Endpoint("user_tracking_domain_clicks", "v3/user/tracking_domain_clicks", (req("domain"), *metrics())),
    Endpoint("user_tracking_domain_shorten_counts", "v3/user/tracking_domain_shorten_counts",
             (req("domain"), *metrics())),
    # user history
    Endpoint("user_info", "v3/user/info", (opt("login"), opt("full_name"))),
    Endpoint(
        "user_link_history",
        "v3/user/link_history",
        (
            opt("link"),
            opt("limit", 50),
            opt("offset"),
            opt("created_before"),
            opt("created_after"),
            opt("modified_after"),
            opt("expand_client_id"),
            opt("archived"),
            opt("private"),
            opt("user"),
        ),
    ),
    Endpoint(
        "user_network_history",
        "v3/user/network_history",
        (opt("offset"), opt("expand_client_id", False), opt("limit", 20), opt("expand_user")),
    ),
    Endpoint("user_bundle_history", "v3/user/bundle_history"),
    # domains
    Endpoint("bitly_pro_domain", "v3/bitly_pro_domain", (req("domain"),),
             unwrap=("bitly_pro_domain",), transform=as_bool,
             doc="Whether ``domain`` is a registered bitly pro domain."),
    Endpoint("oauth_app", "v3/oauth/app", (req("client_id"),)),
    # bundles
    Endpoint("bundle_bundles_by_user", "v3/bundle/bundles_by_user", (req("user"), opt("expand_user"))),
    _bundle("bundle_clone", "v3/bundle/clone"),
    _bundle("bundle_collaborator_add", "v3/bundle/collaborator_add", req("collaborator")),
    _bundle("bundle_collaborator_remove", "v3/bundle/collaborator_remove", req("collaborator")),
    _bundle("bundle_pending_collaborator_remove", "v3/bundle/pending_collaborator_remove", req("collaborator")),
    _bundle("bundle_contents", "v3/bundle/contents", opt("expand_user")),
    Endpoint("bundle_create", "v3/bundle/create", (opt("private"), opt("title"), opt("description")),
             unwrap=("bundle",)),
    _bundle("bundle_link_add", "v3/bundle/link_add", req("link"), opt("title")),
    _bundle("bundle_link_comment_add", "v3/bundle/link_comment_add", req("link"), req("comment")),
    _bundle("bundle_link_comment_edit", "v3/bundle/link_comment_edit", req("link"), req("comment_id"), req("comment")),
    _bundle("bundle_link_comment_remove", "v3/bundle/link_comment_remove", req("link"), req("comment_id")),
    _bundle("bundle_link_remove", "v3/bundle/link_remove", req("link")),
    _bundle("bundle_link_reorder", "v3/bundle/link_reorder", req("link"), req("display_order")),
    _bundle("bundle_view_count", "v3/bundle/view_count", unwrap=("view_count",)),
)
