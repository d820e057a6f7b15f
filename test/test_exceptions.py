# test/test_exceptions.py
import pytest

from bandenergy.core import (
    CoreError,
    InvalidTimeSeries,
    InvalidCurveSet,
    InvalidCollection,
    CurveNotFound,
    CurveSetNotFound,
    ProcessingError,
    InvalidLength,
    InvalidWindow,
    LengthMismatch,
    InvalidBandConfig,
    InvalidParameter,
    TableFormatError,
)


def test_exception_inheritance_validation():
    assert issubclass(InvalidTimeSeries, CoreError)
    assert issubclass(InvalidCurveSet, CoreError)
    assert issubclass(InvalidCollection, CoreError)
    assert issubclass(TableFormatError, CoreError)


def test_exception_inheritance_processing():
    for exc in (InvalidLength, InvalidWindow, LengthMismatch, InvalidBandConfig, InvalidParameter):
        assert issubclass(exc, ProcessingError)
        assert issubclass(exc, CoreError)


def test_exception_inheritance_lookup_keyerror():
    assert issubclass(CurveNotFound, KeyError)
    assert issubclass(CurveNotFound, CoreError)
    assert issubclass(CurveSetNotFound, KeyError)
    assert issubclass(CurveSetNotFound, CoreError)


def test_lookup_errors_can_be_raised_and_caught_as_keyerror():
    with pytest.raises(KeyError):
        raise CurveNotFound("EEG1")

    with pytest.raises(KeyError):
        raise CurveSetNotFound("subject01")
