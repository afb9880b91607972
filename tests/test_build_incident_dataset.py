import json

import pandas as pd
import pytest

from incident_map import build_incident_dataset as datasets
from incident_map.errors import TopologyError


def test_build_incidents_df_normalizes_coordinates(tmp_path, monkeypatch):
    source = tmp_path / 'raw.csv'
    source.write_text(
        'Total Dead and Missing,Location Coordinates\n'
        '5,"31.65, -106.45"\n'
        '2,"bad"\n',
        encoding='utf-8',
    )
    monkeypatch.setattr(datasets, 'INCIDENTS_FILE', tmp_path / 'processed' / 'incidents.csv')

    df = datasets.build_incidents_df(source=str(source), force_rebuild=True)

    assert list(df.columns) == ['incident_id', 'longitude', 'latitude', 'Total Dead and Missing']
    assert df.iloc[0]['longitude'] == -106.45
    assert df.iloc[0]['latitude'] == 31.65
    stored = pd.read_csv(tmp_path / 'processed' / 'incidents.csv')
    assert len(stored) == 1


def test_build_incidents_df_uses_cache(tmp_path, monkeypatch):
    cached = tmp_path / 'incidents.csv'
    pd.DataFrame([{'incident_id': 9, 'longitude': 1.0, 'latitude': 2.0, 'Total Dead and Missing': 3}]).to_csv(
        cached, index=False
    )
    monkeypatch.setattr(datasets, 'INCIDENTS_FILE', cached)

    df = datasets.build_incidents_df(source='unused.csv')

    assert df.iloc[0]['incident_id'] == 9


def test_build_topology_copies_source(tmp_path, world_topology_path, world_topology):
    source = world_topology_path
    output = tmp_path / 'processed' / 'world_topology.json'

    result = datasets.build_topology(source=str(source), output=output)

    assert result == output
    assert json.loads(output.read_text(encoding='utf-8'))['objects'].keys() == world_topology['objects'].keys()


def test_build_topology_requires_land_and_border_objects(tmp_path, world_topology):
    del world_topology['objects']['land']
    source = tmp_path / 'no_land.json'
    source.write_text(json.dumps(world_topology), encoding='utf-8')
    output = tmp_path / 'processed' / 'world_topology.json'

    with pytest.raises(TopologyError, match="'land'"):
        datasets.build_topology(source=str(source), output=output)
    assert not output.exists()
