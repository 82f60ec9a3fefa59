"""osm-topology — streaming OSM entity parser and topology reconstruction."""

__version__ = "0.1.0"
