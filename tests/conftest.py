import pytest

import geomember


@pytest.fixture(params=["function", "decoder"])
def decode(request):
    """Decode a single member through either the module-level function or a
    reusable `Decoder`"""
    if request.param == "function":
        return geomember.decode_member
    return geomember.Decoder().decode


@pytest.fixture(params=["function", "decoder"])
def decode_many(request):
    if request.param == "function":
        return geomember.decode_members
    return geomember.Decoder().decode_members
