"""
Pytest configuration and fixtures.

All engine computations are pure: no database, no network, no mocks.
"""
import pytest

from activity_analytics.models import (
    AthleteProfile,
    Gender,
    LactateThreshold,
    UserSettings,
    UserZones,
)
from fixtures.stream_fixtures import make_ride_stream, make_run_stream


@pytest.fixture
def athlete():
    """Male athlete with cycling and running thresholds configured."""
    return AthleteProfile(
        gender=Gender.MEN,
        max_hr=190,
        rest_hr=60,
        lthr=LactateThreshold(),
        weight=70,
        cycling_ftp=200,
        running_ftp=300,
        swim_ftp=None,
    )


@pytest.fixture
def athlete_without_thresholds():
    return AthleteProfile(max_hr=190, rest_hr=60, weight=70)


@pytest.fixture
def default_zones():
    return UserZones.defaults()


@pytest.fixture
def user_settings(default_zones):
    return UserSettings(zones=default_zones)


@pytest.fixture
def ride_stream():
    """One hour flat ride at 20 kph and 200 W."""
    return make_ride_stream()


@pytest.fixture
def run_stream():
    """One hour flat run at 3 m/s without power."""
    return make_run_stream()
