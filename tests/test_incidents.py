import pandas as pd
import pytest

from incident_map import incidents
from incident_map.errors import InvalidCoordinateError


def test_parse_coordinates_reverses_latlon_cells():
    assert incidents.parse_coordinates('19.43, -99.13', 'latlon') == (-99.13, 19.43)
    assert incidents.parse_coordinates('-99.13, 19.43', 'lonlat') == (-99.13, 19.43)


@pytest.mark.parametrize('value', ['19.43', 'a, b', '95.0, 10.0', None, '1, 2, 3'])
def test_parse_coordinates_rejects_bad_cells(value):
    with pytest.raises(InvalidCoordinateError):
        incidents.parse_coordinates(value, 'latlon')


def test_parse_coordinates_requires_known_order():
    with pytest.raises(ValueError):
        incidents.parse_coordinates('1, 2', 'xy')


def test_records_from_frame_skips_invalid_rows(capsys):
    df = pd.DataFrame(
        [
            {'Location Coordinates': '19.43, -99.13', 'Total Dead and Missing': 50},
            {'Location Coordinates': 'unknown', 'Total Dead and Missing': 3},
            {'Location Coordinates': '35.9, 14.5', 'Total Dead and Missing': None},
            {'Location Coordinates': '36.0, -5.6', 'Total Dead and Missing': -2},
            {'Location Coordinates': '32.5, 13.2', 'Total Dead and Missing': '7'},
        ]
    )

    records = incidents.records_from_frame(df)

    assert [r.identity for r in records] == [0, 4]
    assert records[0].coordinates == (-99.13, 19.43)
    assert records[0].magnitude == 50.0
    assert records[1].magnitude == 7.0
    assert 'Skipped 3 of 5' in capsys.readouterr().out


def test_records_from_frame_uses_separate_columns_and_ids():
    df = pd.DataFrame(
        {
            'incident_id': ['a', 'b'],
            'longitude': [10.0, 200.0],
            'latitude': [45.0, 0.0],
            'deaths': [1, 2],
        }
    )

    records = incidents.records_from_frame(df, magnitude_column='deaths', coordinates_column=None, id_column='incident_id')

    assert len(records) == 1
    assert records[0].identity == 'a'
    assert records[0].coordinates == (10.0, 45.0)


def test_records_from_frame_requires_magnitude_column():
    df = pd.DataFrame({'longitude': [1.0], 'latitude': [2.0]})

    with pytest.raises(ValueError):
        incidents.records_from_frame(df, magnitude_column='missing')


def test_records_from_frame_requires_coordinates():
    df = pd.DataFrame({'Total Dead and Missing': [1]})

    with pytest.raises(ValueError):
        incidents.records_from_frame(df)


def test_load_incidents_reads_csv(tmp_path):
    path = tmp_path / 'incidents.csv'
    path.write_text(
        'Web ID,Total Dead and Missing,Location Coordinates\n'
        '101,4,"31.65, -106.45"\n'
        '102,12,"35.7, 14.2"\n',
        encoding='utf-8',
    )

    records = incidents.load_incidents(path, id_column='Web ID')

    assert [r.identity for r in records] == [101, 102]
    assert records[0].coordinates == (-106.45, 31.65)


def test_load_incidents_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        incidents.load_incidents(tmp_path / 'absent.csv')
