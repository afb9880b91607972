import copy
import json

import pytest

# Two unit squares side by side sharing the edge x=1 (arc 0).
TWO_SQUARES_TOPOLOGY = {
    'type': 'Topology',
    'transform': {'scale': [1, 1], 'translate': [0, 0]},
    'arcs': [
        [[1, 0], [0, 1]],
        [[1, 1], [-1, 0], [0, -1], [1, 0]],
        [[1, 0], [1, 0], [0, 1], [-1, 0]],
    ],
    'objects': {
        'countries': {
            'type': 'GeometryCollection',
            'geometries': [
                {'type': 'Polygon', 'arcs': [[0, 1]], 'properties': {'name': 'West'}},
                {'type': 'Polygon', 'arcs': [[2, -1]], 'properties': {'name': 'East'}},
            ],
        },
        'land': {
            'type': 'GeometryCollection',
            'geometries': [{'type': 'Polygon', 'arcs': [[1, 2]]}],
        },
    },
}


@pytest.fixture
def world_topology():
    return copy.deepcopy(TWO_SQUARES_TOPOLOGY)


@pytest.fixture
def world_topology_path(tmp_path, world_topology):
    path = tmp_path / 'world.json'
    path.write_text(json.dumps(world_topology), encoding='utf-8')
    return path
