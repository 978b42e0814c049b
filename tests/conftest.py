"""
Shared pytest fixtures for the mapgraph test suite.
"""

import pytest

from mapgraph.config import RasterConfig
from mapgraph.graph import GeoGraph
from mapgraph.models import BoundingBox
from mapgraph.raster import Rasterer


OSM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="37.8700" lon="-122.2600"/>
  <node id="2" lat="37.8710" lon="-122.2600">
    <tag k="name" v="Berkeley Bowl"/>
  </node>
  <node id="3" lat="37.8720" lon="-122.2610"/>
  <node id="4" lat="37.8730" lon="-122.2620">
    <tag k="name" v="Berkeley Art Museum"/>
    <tag k="tourism" v="museum"/>
  </node>
  <node id="5" lat="37.8740" lon="-122.2630"/>
  <node id="6" lat="not-a-number" lon="-122.2640"/>
  <way id="10">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <tag k="highway" v="residential"/>
    <tag k="name" v="Oxford Street"/>
  </way>
  <way id="11">
    <nd ref="3"/>
    <nd ref="5"/>
    <tag k="highway" v="footway"/>
  </way>
  <way id="12">
    <nd ref="3"/>
    <nd ref="99"/>
    <tag k="highway" v="primary"/>
  </way>
</osm>
"""


@pytest.fixture
def raster_config():
    """The default Berkeley root tile set: 256px tiles, depths 0-7."""
    return RasterConfig()


@pytest.fixture
def rasterer(raster_config):
    return Rasterer(raster_config)


@pytest.fixture
def root_box(raster_config):
    """A query box exactly equal to the root tile."""
    return BoundingBox(
        ullon=raster_config.root_ullon,
        ullat=raster_config.root_ullat,
        lrlon=raster_config.root_lrlon,
        lrlat=raster_config.root_lrlat,
    )


@pytest.fixture
def small_graph():
    """
    Four connected points around campus plus one isolated point (id 50).

        10 -- 20 -- 30
               |
              40
    """
    g = GeoGraph()
    g.add_point(10, 37.8700, -122.2600, {"name": "Oxford & Center"})
    g.add_point(20, 37.8710, -122.2590)
    g.add_point(30, 37.8720, -122.2580)
    g.add_point(40, 37.8690, -122.2570)
    g.add_point(50, 37.8800, -122.2500)
    g.add_edge(10, 20)
    g.add_edge(20, 30)
    g.add_edge(20, 40)
    return g


@pytest.fixture
def osm_xml_path(tmp_path):
    path = tmp_path / "campus.osm"
    path.write_text(OSM_XML, encoding="utf-8")
    return str(path)
