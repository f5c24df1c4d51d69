"""Tests for QueryBuilder and the QuerySpec model."""

from __future__ import annotations

import dataclasses

import pytest

from querygen import (
    ConfigurationError,
    ErrorCode,
    FixedParameter,
    InvalidHostError,
    InvalidParameterError,
    InvalidUrlError,
    MixedParameter,
    ParameterKind,
    QueryBuilder,
    QuerySpec,
)
from querygen.config import load_suite


# ============================================================
# Host and URL Validation
# ============================================================


class TestHost:
    """Tests for QueryBuilder.host."""

    @pytest.mark.parametrize(
        "host",
        [
            "localhost",
            "http://localhost",
            "http://localhost:8080",
            "https://api.example.com",
            "api.example.com:443",
            "10.0.0.1",
        ],
    )
    def test_valid_hosts(self, builder, host):
        assert builder.query("Q").host(host).build().host == host

    def test_trailing_slash_dropped(self, builder):
        spec = builder.query("Q").host("http://localhost:8080/").build()
        assert spec.host == "http://localhost:8080"

    @pytest.mark.parametrize(
        "host",
        [
            "",
            "ftp://localhost",
            "http://",
            "http://localhost:port",
            "http://localhost/api",
            "localhost:8080/api/",
            "h:١٢",
            "http://localhost:８０",
            None,
            8080,
        ],
    )
    def test_invalid_hosts(self, builder, host):
        with pytest.raises(InvalidHostError) as exc_info:
            builder.query("Q").host(host)
        assert exc_info.value.error_code == ErrorCode.INVALID_HOST
        assert exc_info.value.field == "host"

    def test_invalid_host_is_configuration_error(self, builder):
        with pytest.raises(ConfigurationError):
            builder.host("http://a/b")


class TestUrl:
    """Tests for QueryBuilder.url."""

    @pytest.mark.parametrize("url", ["/a", "/products/by-filters", "/api/v1/items", "/a.b/c-d"])
    def test_valid_urls(self, builder, url):
        assert builder.query("Q").url(url).build().url == url

    @pytest.mark.parametrize(
        "url",
        ["", "/", "a/b", "/a/", "//a", "/a//b", "/a?b=1/", None, 1],
    )
    def test_invalid_urls(self, builder, url):
        with pytest.raises(InvalidUrlError) as exc_info:
            builder.query("Q").url(url)
        assert exc_info.value.error_code == ErrorCode.INVALID_URL

    def test_error_carries_query_name(self, builder):
        with pytest.raises(InvalidUrlError) as exc_info:
            builder.query("Sales").url("sales")
        assert exc_info.value.context.query_name == "Sales"


# ============================================================
# Query Lifecycle
# ============================================================


class TestQuery:
    """Tests for QueryBuilder.query and reset."""

    def test_query_sets_name(self, builder):
        assert builder.query("Sales").build().name == "Sales"

    @pytest.mark.parametrize("name", ["", None, 3])
    def test_invalid_name(self, builder, name):
        with pytest.raises(ConfigurationError) as exc_info:
            builder.query(name)
        assert exc_info.value.error_code == ErrorCode.INVALID_NAME

    def test_query_resets_previous_state(self, builder):
        builder.query("A").host("localhost").url("/a").always_filter()
        builder.fix_param("f", "1").mix_param("m", ["x"])
        spec = builder.query("B").build()
        assert spec.to_dict() == QuerySpec(name="B").to_dict()

    def test_reset(self, builder):
        builder.query("A").host("localhost").url("/a").fix_param("f", "1")
        assert builder.reset().build().to_dict() == QuerySpec().to_dict()

    def test_built_spec_survives_reset(self, builder):
        spec = builder.query("A").host("localhost").url("/a").fix_param("f", "1").build()
        builder.query("B")
        assert spec.name == "A"
        assert list(spec.fixed) == ["f"]

    def test_always_filter_toggle(self, builder):
        assert builder.query("A").always_filter().build().require_non_empty is True
        assert builder.always_filter(False).build().require_non_empty is False

    def test_methods_chain(self, builder):
        assert builder.query("A") is builder
        assert builder.host("localhost") is builder
        assert builder.url("/a") is builder
        assert builder.always_filter() is builder
        assert builder.fix_param("f", "1") is builder
        assert builder.mix_param("m", "1") is builder


# ============================================================
# Parameters
# ============================================================


class TestParameters:
    """Tests for fix_param, mix_param and add_param."""

    def test_scalar_is_wrapped(self, builder):
        spec = builder.query("Q").fix_param("promotion", "123456").build()
        assert spec.fixed["promotion"] == FixedParameter(name="promotion", values=("123456",))

    def test_list_keeps_order(self, builder):
        spec = builder.query("Q").mix_param("color", ["red", "green", "blue"]).build()
        assert spec.mixed["color"].values == ("red", "green", "blue")
        assert isinstance(spec.mixed["color"], MixedParameter)

    def test_values_are_encoded(self, builder):
        spec = builder.query("Q").fix_param("region", ["north america", 5, True]).build()
        assert spec.fixed["region"].values == ("north%20america", "5", "true")

    @pytest.mark.parametrize("absent", [None, "", False, [], float("nan")])
    def test_absent_values_dropped(self, builder, absent):
        spec = builder.query("Q").fix_param("a", absent).mix_param("b", absent).build()
        assert not spec.has_parameters

    def test_zero_is_kept(self, builder):
        spec = builder.query("Q").fix_param("page", 0).build()
        assert spec.fixed["page"].values == ("0",)

    def test_declaration_order(self, builder):
        spec = builder.query("Q").mix_param("b", "1").mix_param("a", "2").mix_param("c", "3").build()
        assert list(spec.mixed) == ["b", "a", "c"]

    def test_redeclare_replaces_values_and_keeps_position(self, builder):
        spec = (
            builder.query("Q")
            .mix_param("a", "1")
            .mix_param("b", "2")
            .mix_param("a", ["3", "4"])
            .build()
        )
        assert list(spec.mixed) == ["a", "b"]
        assert spec.mixed["a"].values == ("3", "4")

    def test_fixed_and_mixed_are_separate(self, builder):
        spec = builder.query("Q").fix_param("p", "1").mix_param("p", "2").build()
        assert spec.fixed["p"].values == ("1",)
        assert spec.mixed["p"].values == ("2",)

    def test_add_param_with_kind_string(self, builder):
        spec = builder.query("Q").add_param("fix", "a", "1").add_param("mix", "b", "2").build()
        assert list(spec.fixed) == ["a"]
        assert list(spec.mixed) == ["b"]

    def test_add_param_with_kind_enum(self, builder):
        spec = builder.query("Q").add_param(ParameterKind.MIXED, "b", "2").build()
        assert spec.mixed["b"].kind is ParameterKind.MIXED

    def test_unknown_kind(self, builder):
        with pytest.raises(InvalidParameterError, match="either 'fix' or 'mix'") as exc_info:
            builder.query("Q").add_param("both", "a", "1")
        assert exc_info.value.error_code == ErrorCode.INVALID_PARAMETER_KIND
        assert isinstance(exc_info.value.cause, ValueError)

    @pytest.mark.parametrize("name", ["", None, 7])
    def test_invalid_fixed_name(self, builder, name):
        with pytest.raises(InvalidParameterError, match="`fix_param` method") as exc_info:
            builder.query("Q").fix_param(name, "1")
        assert exc_info.value.error_code == ErrorCode.INVALID_PARAMETER_NAME

    def test_invalid_mixed_name(self, builder):
        with pytest.raises(InvalidParameterError, match="`mix_param` method"):
            builder.query("Q").mix_param("", "1")

    def test_invalid_value(self, builder):
        with pytest.raises(InvalidParameterError) as exc_info:
            builder.query("Q").mix_param("color", ["red", {"hex": "f00"}])
        assert exc_info.value.error_code == ErrorCode.INVALID_PARAMETER_VALUE
        assert exc_info.value.name == "color"


class TestParameterErrorContext:
    """Parameter errors carry the query and parameter they came from."""

    def test_unsupported_value(self, builder):
        with pytest.raises(InvalidParameterError) as exc_info:
            builder.query("Sales").fix_param("p", [None])
        error = exc_info.value
        assert error.error_code == ErrorCode.INVALID_PARAMETER_VALUE
        assert error.context.query_name == "Sales"
        assert error.context.parameter == "p"
        assert str(error).endswith("| at query=Sales > param=p")

    def test_unknown_kind(self, builder):
        with pytest.raises(InvalidParameterError) as exc_info:
            builder.query("Sales").add_param("both", "region", "eu")
        error = exc_info.value
        assert error.error_code == ErrorCode.INVALID_PARAMETER_KIND
        assert error.context.query_name == "Sales"
        assert error.context.parameter == "region"

    @pytest.mark.parametrize("name, shown", [("", "''"), (None, "None"), (7, "7")])
    def test_invalid_name(self, builder, name, shown):
        with pytest.raises(InvalidParameterError) as exc_info:
            builder.query("Sales").mix_param(name, ["x"])
        error = exc_info.value
        assert error.error_code == ErrorCode.INVALID_PARAMETER_NAME
        assert error.context.query_name == "Sales"
        assert error.context.parameter == shown

    def test_host_error_has_no_parameter(self, builder):
        with pytest.raises(InvalidHostError) as exc_info:
            builder.query("Sales").host("http://a/b")
        assert exc_info.value.context.query_name == "Sales"
        assert exc_info.value.context.parameter is None

    def test_suite_file_adds_source(self, write_suite):
        path = write_suite("""
            host: localhost
            queries:
              - name: Sales
                url: /sales
                fixed:
                  p: [a, null]
        """)
        with pytest.raises(InvalidParameterError) as exc_info:
            load_suite(path)
        context = exc_info.value.context
        assert (context.source, context.query_name, context.parameter) == (str(path), "Sales", "p")


# ============================================================
# QuerySpec
# ============================================================


class TestQuerySpec:
    """Tests for the QuerySpec snapshot."""

    def test_frozen(self, products_spec):
        with pytest.raises(dataclasses.FrozenInstanceError):
            products_spec.name = "Other"

    def test_parameter_mappings_read_only(self, products_spec):
        with pytest.raises(TypeError):
            products_spec.mixed["new"] = MixedParameter(name="new", values=("x",))

    def test_snapshot_unaffected_by_builder(self, builder):
        builder.query("Q").mix_param("a", "1")
        spec = builder.build()
        builder.mix_param("b", "2")
        assert list(spec.mixed) == ["a"]

    def test_base_url(self, products_spec):
        assert products_spec.base_url == "http://localhost:8080/products/by-filters"

    def test_fixed_values(self, builder):
        spec = builder.query("Q").fix_param("a", ["1", "2"]).build()
        assert spec.fixed_values() == {"a": ("1", "2")}

    def test_sizes(self, products_spec):
        assert [p.size for p in products_spec.mixed.values()] == [1, 3]

    def test_to_dict(self, products_spec):
        assert products_spec.to_dict() == {
            "name": "ProductsByFilter",
            "host": "http://localhost:8080",
            "url": "/products/by-filters",
            "require_non_empty": True,
            "fixed": {},
            "mixed": {"colorCodingType": ["status"], "color": ["green", "yellow", "red"]},
        }

    def test_parameter_to_dict(self):
        param = FixedParameter(name="a", values=("1",))
        assert param.to_dict() == {"name": "a", "kind": "fix", "values": ["1"]}


class TestBuilderGenerate:
    """Tests for QueryBuilder.generate."""

    def test_returns_count(self, builder):
        urls = []
        count = (
            builder.query("Sales")
            .host("http://localhost:9999")
            .url("/sales")
            .fix_param("sku", "1232456")
            .mix_param("class", ["c1", "c2"])
            .mix_param("department", ["d1", "d2", "d3"])
            .generate(emit=urls.append)
        )
        assert count == 32
        assert len(urls) == 32

    def test_uses_given_generator(self, builder, generator, products_urls):
        urls = []
        (
            builder.query("ProductsByFilter")
            .host("http://localhost:8080")
            .url("/products/by-filters")
            .always_filter()
            .mix_param("colorCodingType", ["status"])
            .mix_param("color", ["green", "yellow", "red"])
            .generate(emit=urls.append, generator=generator)
        )
        assert urls == products_urls

    def test_builder_reusable_after_generate(self, builder):
        first, second = [], []
        builder.query("A").host("localhost").url("/a").mix_param("x", "1").generate(emit=first.append)
        builder.query("B").host("localhost").url("/b").mix_param("y", "2").generate(emit=second.append)
        assert first == ["localhost/a", "localhost/a?x=1"]
        assert second == ["localhost/b", "localhost/b?y=2"]
