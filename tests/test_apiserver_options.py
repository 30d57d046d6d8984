import dataclasses

import pytest

from sbombastic.apiserver_options import RESTOptions, get_rest_options

GROUP = "storage.sbombastic.rancher.io"


def test_garbage_collection_enabled_with_one_worker():
    options = get_rest_options(GROUP, "images")
    assert options.enable_garbage_collection is True
    assert options.delete_collection_workers == 1


@pytest.mark.parametrize("resource", ["images", "sboms", "vulnerabilityreports"])
def test_prefix_is_group_then_resource(resource):
    options = get_rest_options(GROUP, resource)
    assert options.resource_prefix == "/" + GROUP + "/" + resource


def test_prefix_splits_back_into_parts():
    options = get_rest_options(GROUP, "sboms")
    _, group, resource = options.resource_prefix.split("/")
    assert (group, resource) == (GROUP, "sboms")


def test_options_are_immutable():
    options = get_rest_options(GROUP, "images")
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.delete_collection_workers = 5
    assert options.delete_collection_workers == 1


def test_same_inputs_give_equal_options():
    assert get_rest_options(GROUP, "images") == get_rest_options(GROUP, "images")
    assert get_rest_options(GROUP, "images") == RESTOptions(
        enable_garbage_collection=True,
        delete_collection_workers=1,
        resource_prefix="/storage.sbombastic.rancher.io/images",
    )