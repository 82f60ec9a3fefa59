"""Shared test fixtures."""

from __future__ import annotations

import pytest

from osmtopo.engine.pipeline import TopologyPipeline


# Unit square drawn as one closed way
SQUARE_OSM = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="0" lon="0"/>
  <node id="2" lat="1" lon="0"/>
  <node id="3" lat="1" lon="1"/>
  <node id="4" lat="0" lon="1"/>
  <way id="10">
    <nd ref="1"/><nd ref="2"/><nd ref="3"/><nd ref="4"/><nd ref="1"/>
    <tag k="building" v="yes"/>
    <tag k="name" v="Town Hall"/>
  </way>
</osm>'''

# Courtyard building: outer square split into two open ways, one inner ring
COURTYARD_OSM = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="0" lon="0"/>
  <node id="2" lat="10" lon="0"/>
  <node id="3" lat="10" lon="10"/>
  <node id="4" lat="0" lon="10"/>
  <node id="5" lat="4" lon="4"/>
  <node id="6" lat="6" lon="4"/>
  <node id="7" lat="6" lon="6"/>
  <node id="8" lat="4" lon="6"/>
  <node id="20" lat="5" lon="20">
    <tag k="amenity" v="cafe"/>
    <tag k="name" v="Corner Cafe"/>
  </node>
  <way id="100"><nd ref="1"/><nd ref="2"/><nd ref="3"/></way>
  <way id="101"><nd ref="3"/><nd ref="4"/><nd ref="1"/></way>
  <way id="102"><nd ref="5"/><nd ref="6"/><nd ref="7"/><nd ref="8"/><nd ref="5"/></way>
  <relation id="500">
    <member type="way" ref="100" role="outer"/>
    <member type="way" ref="101" role="outer"/>
    <member type="way" ref="102" role="inner"/>
    <tag k="type" v="multipolygon"/>
    <tag k="building" v="yes"/>
    <tag k="name" v="Courtyard"/>
  </relation>
</osm>'''

# Relation 600 references relation 601, which only appears later in the file
FORWARD_REF_OSM = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="0" lon="0"/>
  <node id="2" lat="1" lon="1"/>
  <way id="10"><nd ref="1"/><nd ref="2"/></way>
  <relation id="600">
    <member type="relation" ref="601" role=""/>
    <member type="node" ref="1" role="label"/>
    <tag k="type" v="site"/>
    <tag k="name" v="Campus"/>
  </relation>
  <relation id="601">
    <member type="way" ref="10" role=""/>
    <tag k="type" v="collection"/>
  </relation>
</osm>'''

# Document that breaks off inside the second way
TRUNCATED_OSM = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="0" lon="0"/>
  <node id="2" lat="1" lon="1"/>
  <way id="10"><nd ref="1"/><nd ref="2"/></way>
  <way id="11"><nd ref="1"/><nd re'''


def unit_square_records(tags: dict[str, str] | None = None) -> list[tuple]:
    """Four corners and one closed path over them."""
    return [
        ("point", "1", 0.0, 0.0, {}),
        ("point", "2", 0.0, 1.0, {}),
        ("point", "3", 1.0, 1.0, {}),
        ("point", "4", 1.0, 0.0, {}),
        ("path", "10", ["1", "2", "3", "4", "1"], tags if tags is not None else {"building": "yes"}),
    ]


@pytest.fixture
def pipeline() -> TopologyPipeline:
    return TopologyPipeline()


@pytest.fixture
def square_osm() -> str:
    return SQUARE_OSM


@pytest.fixture
def courtyard_osm() -> str:
    return COURTYARD_OSM
