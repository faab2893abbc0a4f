"""
Unit tests for roaming trail reconstruction

Tests event normalization, status classification and band steering detection.
"""

import logging

import pandas as pd
import pytest
from src.data.schemas import RawStationEvent, RoamingEvent
from src.core.mobility.status_classifier import classify_status
from src.core.mobility.event_normalizer import EventNormalizer, parse_event_timestamp
from src.core.mobility.band_steering import detect_band_steering
from src.core.mobility.roaming_trail import RoamingTrailBuilder, summarize_trail, trail_to_dataframe


def raw(ts, event_type='Roam', **kwargs):
    return RawStationEvent(timestamp=str(ts), event_type=event_type, **kwargs)


def event(ts, ap_name=None, ap_serial=None, band=None, channel=None):
    return RoamingEvent(timestamp=ts, event_type='Roam', ap_name=ap_name,
                        ap_serial=ap_serial, band=band, channel=channel)


class TestStatusClassifier:

    def test_disconnects_are_bad(self):
        assert classify_status('De-registration', -40) == 'bad'
        assert classify_status('Disassociate', None) == 'bad'

    def test_rssi_bands(self):
        assert classify_status('Roam', -60) == 'good'
        assert classify_status('Roam', -61) == 'warning'
        assert classify_status('Roam', -70) == 'warning'
        assert classify_status('Roam', -71) == 'bad'

    def test_missing_rssi_defaults_good(self):
        assert classify_status('Associate', None) == 'good'


class TestEventNormalizer:

    def setup_method(self):
        self.normalizer = EventNormalizer()

    def test_normalize_full_event(self):
        normalized = self.normalizer.normalize(RawStationEvent(
            timestamp='1700000000000',
            eventType='Roam',
            apName='AP-Lobby',
            apSerial='SN123',
            ssid='corp',
            details='Signal[-65] Band[5GHz] Channel[36] Cause[Roam] Auth[SAE]',
            ipAddress='10.0.0.5',
        ))
        assert normalized.timestamp == 1700000000000
        assert normalized.ap_name == 'AP-Lobby'
        assert normalized.rssi == -65
        assert normalized.status == 'warning'
        assert normalized.band == '5GHz'
        assert normalized.channel == '36'
        assert normalized.cause == 'Roam'
        assert normalized.auth_method == 'SAE'
        assert normalized.ip_address == '10.0.0.5'
        assert normalized.is_band_steering is False

    def test_optional_identity_fields_stay_absent(self):
        normalized = self.normalizer.normalize(raw(1000, 'Associate'))
        assert normalized.ap_name is None
        assert normalized.ap_serial is None
        assert normalized.ssid is None

    def test_malformed_details_do_not_raise(self):
        normalized = self.normalizer.normalize(raw(1000, 'Roam', details='Signal[-65'))
        assert normalized.rssi is None
        assert normalized.status == 'good'

    def test_timestamp_formats(self):
        assert parse_event_timestamp('1700000000000') == 1700000000000
        assert parse_event_timestamp('1700000000000.0') == 1700000000000
        assert parse_event_timestamp('2023-11-14T22:13:20Z') == 1700000000000
        assert parse_event_timestamp('2023-11-14T22:13:20') == 1700000000000

    def test_bad_timestamp_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_event_timestamp('yesterday')

    def test_out_of_range_epoch_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_event_timestamp('99999999999999999999')
        with pytest.raises(ValueError):
            parse_event_timestamp('-99999999999999999999')

    def test_normalize_raises_on_bad_timestamp(self):
        # Dropping is left to the trail builder
        with pytest.raises(ValueError):
            self.normalizer.normalize(raw('not-a-time', 'Roam'))

    def test_numeric_timestamp_coerced_at_boundary(self):
        assert RawStationEvent.model_validate({'timestamp': 1700000000000, 'eventType': 'Roam'}).timestamp == '1700000000000'


class TestBandSteeringDetector:

    def test_same_ap_band_change_only(self):
        events = [
            event(1, ap_name='A1', band='5GHz'),
            event(2, ap_name='A1', band='2.4GHz'),
            event(3, ap_name='A2', band='5GHz'),
        ]
        flags = [e.is_band_steering for e in detect_band_steering(events)]
        assert flags == [False, True, False]

    def test_channel_change_on_same_serial(self):
        events = [
            event(1, ap_name='A1', ap_serial='S1', channel='36'),
            event(2, ap_name='renamed', ap_serial='S1', channel='149'),
        ]
        assert detect_band_steering(events)[1].is_band_steering is True

    def test_missing_band_and_channel_is_not_steering(self):
        events = [event(1, ap_name='A1', band='5GHz'), event(2, ap_name='A1')]
        assert detect_band_steering(events)[1].is_band_steering is False

    def test_same_band_same_channel_is_not_steering(self):
        events = [event(1, ap_name='A1', band='5GHz', channel='36'),
                  event(2, ap_name='A1', band='5GHz', channel='36')]
        assert detect_band_steering(events)[1].is_band_steering is False

    def test_unknown_aps_never_match(self):
        events = [event(1, band='5GHz'), event(2, band='2.4GHz')]
        assert detect_band_steering(events)[1].is_band_steering is False

    def test_only_immediate_predecessor_counts(self):
        # A1/5GHz -> A2 -> A1/2.4GHz: the return to A1 is a roam, not steering
        events = [
            event(1, ap_name='A1', band='5GHz'),
            event(2, ap_name='A2', band='5GHz'),
            event(3, ap_name='A1', band='2.4GHz'),
        ]
        assert [e.is_band_steering for e in detect_band_steering(events)] == [False, False, False]

    def test_input_not_mutated(self):
        events = [event(1, ap_name='A1', band='5GHz'), event(2, ap_name='A1', band='2.4GHz')]
        annotated = detect_band_steering(events)
        assert annotated[1].is_band_steering is True
        assert events[1].is_band_steering is False
        assert annotated[1] is not events[1]

    def test_empty(self):
        assert detect_band_steering([]) == []


class TestRoamingTrailBuilder:

    def setup_method(self):
        self.builder = RoamingTrailBuilder()

    def test_filters_sorts_and_detects(self):
        trail = self.builder.build([
            raw(3000, 'Roam', apName='A2', details='Band[5GHz] Signal[-55]'),
            raw(1000, 'Associate', apName='A1', details='Band[5GHz] Signal[-62]'),
            raw(1500, 'DHCP Lease', apName='A1'),
            raw(2000, 'Roam', apName='A1', details='Band[2.4GHz] Signal[-75]'),
            raw(4000, 'Disassociate', apName='A2'),
        ])
        assert [e.timestamp for e in trail] == [1000, 2000, 3000, 4000]
        assert [e.is_band_steering for e in trail] == [False, True, False, False]
        assert [e.status for e in trail] == ['warning', 'bad', 'good', 'bad']

    def test_bad_timestamp_is_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            trail = self.builder.build([raw('not-a-time', 'Roam'), raw(1000, 'Roam')])
        assert [e.timestamp for e in trail] == [1000]
        assert 'bad timestamp' in caplog.text

    def test_out_of_range_timestamp_is_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            trail = self.builder.build([raw('99999999999999999999', 'Roam'), raw(1000, 'Roam')])
        assert [e.timestamp for e in trail] == [1000]
        assert 'out of range' in caplog.text
        assert len(trail_to_dataframe(trail)) == 1

    def test_equal_timestamps_keep_input_order(self):
        trail = self.builder.build([
            raw(1000, 'Roam', apName='first'),
            raw(1000, 'Roam', apName='second'),
        ])
        assert [e.ap_name for e in trail] == ['first', 'second']

    def test_empty_input(self):
        assert self.builder.build([]) == []


def test_summarize_trail():
    trail = detect_band_steering([
        event(1000, ap_name='A1', band='5GHz'),
        event(2000, ap_name='A1', band='2.4GHz'),
        event(3000, ap_name='A2'),
        event(4000),
    ])
    summary = summarize_trail(trail)
    assert summary['unique_aps'] == ['A1', 'A2', 'Unknown AP']
    assert summary['events_per_ap'] == {'A1': 2, 'A2': 1, 'Unknown AP': 1}
    assert summary['time_range'] == {'min': 1000, 'max': 4000}
    assert summary['band_steering_count'] == 1
    assert summary['total_events'] == 4


def test_summarize_empty_trail():
    summary = summarize_trail([])
    assert summary['unique_aps'] == []
    assert summary['time_range'] == {'min': None, 'max': None}


def test_trail_to_dataframe_applies_display_fallbacks():
    trail = [event(1700000000000, ap_name='A1'), event(1700000001000)]
    trail[0] = trail[0].model_copy(update={'rssi': -65})
    df = trail_to_dataframe(trail)

    assert list(df['ap_name']) == ['A1', 'Unknown AP']
    assert list(df['ap_serial']) == ['N/A', 'N/A']
    assert list(df['ssid']) == ['N/A', 'N/A']
    assert df['rssi'].iloc[0] == -65
    assert pd.isna(df['rssi'].iloc[1])
    assert df['time'].iloc[0] == pd.Timestamp('2023-11-14T22:13:20', tz='UTC')


def test_trail_to_dataframe_far_future_timestamp():
    # Year 3000 parses but lies beyond the nanosecond datetime range
    df = trail_to_dataframe([event(32503680000000, ap_name='A1')])
    assert len(df) == 1
    assert df['timestamp'].iloc[0] == 32503680000000
    assert list(df['ap_name']) == ['A1']


def test_trail_to_dataframe_empty():
    df = trail_to_dataframe([])
    assert df.empty
    assert 'is_band_steering' in df.columns
