"""
Unit tests for REST path resolution.
"""

import pytest

from riak_http.api.http import HttpApi
from riak_http.api.paths import PATH_BUILDERS, resolve_path
from riak_http.command import (
    Bucket,
    Command,
    CommandKind,
    DataType,
    DeleteObject,
    FetchBucketProperties,
    FetchDataType,
    FetchObject,
    ListBuckets,
    ListKeys,
    ResetBucketProperties,
    StoreBucketProperties,
    StoreDataType,
    StoreObject,
)


class TestResolvePath:
    """Test path rules for every command variant."""

    def test_list_buckets(self):
        """Test listing buckets without a bucket type."""
        assert resolve_path(ListBuckets()) == "/buckets"

    def test_list_buckets_with_type(self):
        """Test listing buckets inside a bucket type."""
        command = ListBuckets(bucket=Bucket(name="", type="maps"))
        assert resolve_path(command) == "/types/maps/buckets"

    @pytest.mark.parametrize(
        "command_class",
        [FetchBucketProperties, StoreBucketProperties, ResetBucketProperties],
    )
    def test_bucket_properties(self, command_class):
        """Test bucket property commands share the props path."""
        assert resolve_path(command_class(bucket=Bucket("test"))) == "/buckets/test/props"
        assert (
            resolve_path(command_class(bucket=Bucket("test", type="sets")))
            == "/types/sets/buckets/test/props"
        )

    def test_list_keys(self):
        """Test listing keys of a bucket."""
        assert resolve_path(ListKeys(bucket=Bucket("test"))) == "/buckets/test/keys"

    @pytest.mark.parametrize("command_class", [FetchObject, StoreObject, DeleteObject])
    def test_object_commands(self, command_class):
        """Test object commands address the key."""
        command = command_class(bucket=Bucket("test"), key="k1")
        assert resolve_path(command) == "/buckets/test/keys/k1"

    def test_object_command_with_type(self):
        """Test bucket type prefix on object paths."""
        command = FetchObject(bucket=Bucket("users", type="profiles"), key="u1")
        assert resolve_path(command) == "/types/profiles/buckets/users/keys/u1"

    @pytest.mark.parametrize("command_class", [FetchDataType, StoreDataType])
    def test_data_type_commands(self, command_class):
        """Test data type commands pluralize the kind and use the key."""
        command = command_class(
            bucket=Bucket("test", type="counters"),
            data_type=DataType(kind="counter", key="c1"),
        )
        assert resolve_path(command) == "/types/counters/buckets/test/counters/c1"

    def test_unrecognized_command(self):
        """Test a bare command resolves to an empty path without raising."""
        assert resolve_path(Command(bucket=Bucket("test"))) == ""

    def test_custom_subclass_without_kind(self):
        """Test subclasses that never declared a kind fall back to empty path."""
        class Ping(Command):
            pass

        assert resolve_path(Ping()) == ""

    def test_every_kind_has_a_rule(self):
        """Test the rule table covers the whole CommandKind set."""
        assert set(PATH_BUILDERS) == set(CommandKind)


class TestSetPath:
    """Test HttpApi.set_path."""

    def test_set_path_assigns_path(self, node):
        """Test prepare stores the resolved path on the adapter."""
        api = HttpApi()
        api.prepare(FetchObject(bucket=Bucket("test"), key="k1"), node)
        assert api.path == "/buckets/test/keys/k1"

    def test_set_path_unrecognized(self, node):
        """Test unrecognized commands still prepare, with an empty path."""
        api = HttpApi()
        api.prepare(Command(), node)
        assert api.path == ""
        assert api.http_request.url == "http://127.0.0.1:8098/?"
