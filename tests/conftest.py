"""Shared fixtures: small hand-checkable configurations."""

import numpy as np
import pytest

from ringcut.configuration import Configuration
from ringcut.contraction import ContractionResult
from ringcut.distances import apsp


def wheel(r):
    """Ring of size r plus one hub adjacent to every ring vertex."""
    return Configuration.from_interior(r, [list(range(r))])


@pytest.fixture
def uncontracted_result():
    """Factory for the empty-contraction result with no reductable vertices."""
    def build(conf):
        dist = apsp(conf)
        zeros = np.zeros(conf.n, dtype=bool)
        return ContractionResult(
            conf=conf,
            contraction=(),
            dist=dist,
            dist_contracted=dist,
            representative=np.arange(conf.n),
            inside=zeros,
            outside={6: zeros, 7: zeros},
        )
    return build


@pytest.fixture
def ring6():
    return Configuration.from_interior(6, [])


@pytest.fixture
def ring8():
    return Configuration.from_interior(8, [])


@pytest.fixture
def wheel6():
    return wheel(6)


@pytest.fixture
def wheel7():
    return wheel(7)


@pytest.fixture
def wheel8():
    return wheel(8)


@pytest.fixture
def pendant():
    """
    r = 6; vertex 6 hangs off the ring edge 0-1, vertex 7 hangs off 6.

    {0, 1} separates {6, 7} from the ring and {6} separates {7}.
    """
    return Configuration.from_interior(6, [[0, 1], [6]])


@pytest.fixture
def chord8():
    """
    r = 8 with a chord path 1-8-5, vertex 9 on the 2..4 side, vertex 10 on the 6..0 side.
    """
    return Configuration.from_interior(8, [[1, 5], [2, 3, 4], [6, 7, 0]])


@pytest.fixture
def wheel6_conf_file(tmp_path):
    path = tmp_path / "wheel6.conf"
    path.write_text("wheel on a 6-ring\n7 6\n7 6 1 2 3 4 5 6\n")
    return path


@pytest.fixture
def ring6_conf_file(tmp_path):
    path = tmp_path / "ring6.conf"
    path.write_text("bare ring\n6 6\n")
    return path
