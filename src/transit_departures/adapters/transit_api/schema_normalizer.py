"""Normalizer for the transit API's JSON response shapes.

The API answers the stops and lines requests in one of two schema families:

* "Contents" (NeTEx style): ``{"Contents": {"dataObjects": {...}}}``
* "SIRI": ``{"Siri": {"ServiceDelivery": {"DataObjectDelivery": {"dataObjects": {...}}}}}``

and any repeatable element may arrive as a bare object instead of an array.
Both quirks are absorbed here, so the parsers only ever see flat record lists.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Generic, NamedTuple, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)

from transit_departures.domain.errors import DecodeError
from transit_departures.domain.models.stop_monitoring_visit import StopMonitoringVisit

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def _one_or_many(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    """Decode a list of records, accepting a single record as a one-element list.

    A value that decodes neither way is treated as absent.
    """
    if value is None:
        return None
    try:
        return handler(value)
    except ValidationError:
        pass
    try:
        return handler([value])
    except ValidationError as e:
        logger.debug(f"Ignoring undecodable repeated element: {e.error_count()} error(s)")
        return None


def _absent_on_mismatch(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    """Decode a nested element, treating a structural mismatch as absence."""
    try:
        return handler(value)
    except ValidationError as e:
        logger.debug(f"Ignoring undecodable element: {e.error_count()} error(s)")
        return None


OneOrMany = Annotated[list[T], WrapValidator(_one_or_many)]
Tolerant = Annotated[T, WrapValidator(_absent_on_mismatch)]


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


# Stop monitoring (SIRI StopMonitoring delivery)


class MonitoredCall(_WireModel):
    expected_departure_time: str | None = Field(default=None, alias="ExpectedDepartureTime")
    aimed_departure_time: str | None = Field(default=None, alias="AimedDepartureTime")
    expected_arrival_time: str | None = Field(default=None, alias="ExpectedArrivalTime")
    aimed_arrival_time: str | None = Field(default=None, alias="AimedArrivalTime")


class MonitoredVehicleJourney(_WireModel):
    line_ref: str | None = Field(default=None, alias="LineRef")
    published_line_name: str | None = Field(default=None, alias="PublishedLineName")
    destination_name: str | None = Field(default=None, alias="DestinationName")
    monitored: bool | None = Field(default=None, alias="Monitored")
    monitored_call: Tolerant[MonitoredCall] | None = Field(default=None, alias="MonitoredCall")


class MonitoredStopVisit(_WireModel):
    monitored_vehicle_journey: Tolerant[MonitoredVehicleJourney] | None = Field(
        default=None, alias="MonitoredVehicleJourney"
    )

    def to_visit(self) -> StopMonitoringVisit | None:
        journey = self.monitored_vehicle_journey
        if journey is None:
            return None
        call = journey.monitored_call or MonitoredCall()
        return StopMonitoringVisit(
            line_ref=journey.line_ref,
            published_line_name=journey.published_line_name,
            destination_name=journey.destination_name,
            monitored=journey.monitored,
            expected_departure_time=call.expected_departure_time,
            aimed_departure_time=call.aimed_departure_time,
            expected_arrival_time=call.expected_arrival_time,
            aimed_arrival_time=call.aimed_arrival_time,
        )


class StopMonitoringDelivery(_WireModel):
    monitored_stop_visit: OneOrMany[MonitoredStopVisit] | None = Field(
        default=None, alias="MonitoredStopVisit"
    )


class StopMonitoringServiceDelivery(_WireModel):
    stop_monitoring_delivery: OneOrMany[StopMonitoringDelivery] | None = Field(
        default=None, alias="StopMonitoringDelivery"
    )


class StopMonitoringResponse(_WireModel):
    """Top level of a StopMonitoring response."""

    service_delivery: Tolerant[StopMonitoringServiceDelivery] | None = Field(
        default=None, alias="ServiceDelivery"
    )

    def visits(self) -> list[StopMonitoringVisit]:
        """Return the visits of the first delivery."""
        if self.service_delivery is None or not self.service_delivery.stop_monitoring_delivery:
            return []
        delivery = self.service_delivery.stop_monitoring_delivery[0]
        visits = []
        for stop_visit in delivery.monitored_stop_visit or []:
            visit = stop_visit.to_visit()
            if visit is None:
                logger.debug("Skipping stop visit without vehicle journey")
                continue
            visits.append(visit)
        return visits


# Stops and lines (data object deliveries)


@dataclass(frozen=True)
class StopRecord:
    """One stop as delivered by either schema family."""

    id: str | None
    name: str | None
    latitude: str | float | None = None
    longitude: str | float | None = None


@dataclass(frozen=True)
class LineRecord:
    """One line as delivered by either schema family."""

    id: str | None  # "Id"
    alternate_id: str | None  # "id", used by some operators instead of "Id"
    name: str | None
    public_code: str | None


class FamilyRecords(NamedTuple, Generic[R]):
    """Records extracted from one schema family."""

    family: str
    records: list[R]


class Location(_WireModel):
    longitude: str | float | None = Field(default=None, alias="Longitude")
    latitude: str | float | None = Field(default=None, alias="Latitude")


class ScheduledStopPoint(_WireModel):
    id: str | None = None
    name: str | None = Field(default=None, alias="Name")
    location: Tolerant[Location] | None = Field(default=None, alias="Location")

    def to_record(self) -> StopRecord:
        location = self.location or Location()
        return StopRecord(
            id=self.id, name=self.name, latitude=location.latitude, longitude=location.longitude
        )


class Centroid(_WireModel):
    location: Tolerant[Location] | None = Field(default=None, alias="Location")


class StopPlace(_WireModel):
    id: str | None = None
    name: str | None = Field(default=None, alias="Name")
    centroid: Tolerant[Centroid] | None = Field(default=None, alias="Centroid")

    def to_record(self) -> StopRecord:
        location = (self.centroid.location if self.centroid else None) or Location()
        return StopRecord(
            id=self.id, name=self.name, latitude=location.latitude, longitude=location.longitude
        )


class Line(_WireModel):
    upper_id: str | None = Field(default=None, alias="Id")
    id: str | None = None
    name: str | None = Field(default=None, alias="Name")
    public_code: str | None = Field(default=None, alias="PublicCode")

    def to_record(self) -> LineRecord:
        return LineRecord(
            id=self.upper_id, alternate_id=self.id, name=self.name, public_code=self.public_code
        )


class ContentsDataObjects(_WireModel):
    scheduled_stop_point: OneOrMany[ScheduledStopPoint] | None = Field(
        default=None, alias="ScheduledStopPoint"
    )
    line: OneOrMany[Line] | None = Field(default=None, alias="Line")


class ContentsFamily(_WireModel):
    """The "Contents" (NeTEx style) schema family."""

    data_objects: Tolerant[ContentsDataObjects] | None = Field(default=None, alias="dataObjects")

    def stop_records(self) -> list[StopRecord]:
        if self.data_objects is None:
            return []
        return [stop.to_record() for stop in self.data_objects.scheduled_stop_point or []]

    def line_records(self) -> list[LineRecord]:
        if self.data_objects is None:
            return []
        return [line.to_record() for line in self.data_objects.line or []]


class StopPlaces(_WireModel):
    stop_place: OneOrMany[StopPlace] | None = Field(default=None, alias="StopPlace")


class SiteFrame(_WireModel):
    stop_places: Tolerant[StopPlaces] | None = Field(default=None, alias="stopPlaces")


class Lines(_WireModel):
    line: OneOrMany[Line] | None = Field(default=None, alias="Line")


class ServiceFrame(_WireModel):
    lines: Tolerant[Lines] | None = Field(default=None, alias="lines")


class SiriDataObjects(_WireModel):
    site_frame: Tolerant[SiteFrame] | None = Field(default=None, alias="SiteFrame")
    service_frame: Tolerant[ServiceFrame] | None = Field(default=None, alias="ServiceFrame")


class DataObjectDelivery(_WireModel):
    data_objects: Tolerant[SiriDataObjects] | None = Field(default=None, alias="dataObjects")


class SiriServiceDelivery(_WireModel):
    data_object_delivery: Tolerant[DataObjectDelivery] | None = Field(
        default=None, alias="DataObjectDelivery"
    )


class SiriFamily(_WireModel):
    """The "SIRI" schema family."""

    service_delivery: Tolerant[SiriServiceDelivery] | None = Field(
        default=None, alias="ServiceDelivery"
    )

    def _data_objects(self) -> SiriDataObjects | None:
        delivery = self.service_delivery.data_object_delivery if self.service_delivery else None
        return delivery.data_objects if delivery else None

    def stop_records(self) -> list[StopRecord]:
        data_objects = self._data_objects()
        site_frame = data_objects.site_frame if data_objects else None
        stop_places = site_frame.stop_places if site_frame else None
        if stop_places is None:
            return []
        return [place.to_record() for place in stop_places.stop_place or []]

    def line_records(self) -> list[LineRecord]:
        data_objects = self._data_objects()
        service_frame = data_objects.service_frame if data_objects else None
        lines = service_frame.lines if service_frame else None
        if lines is None:
            return []
        return [line.to_record() for line in lines.line or []]


class DataObjectsResponse(_WireModel):
    """Top level of a stops or lines response."""

    contents: Tolerant[ContentsFamily] | None = Field(default=None, alias="Contents")
    siri: Tolerant[SiriFamily] | None = Field(default=None, alias="Siri")


# Schema families in the order they are consulted: (family name, response attribute)
SCHEMA_FAMILIES: tuple[tuple[str, str], ...] = (
    ("Contents", "contents"),
    ("SIRI", "siri"),
)


def _families(
    response: DataObjectsResponse,
) -> list[tuple[str, ContentsFamily | SiriFamily | None]]:
    """Return every schema family of the response in precedence order, None when absent."""
    return [(name, getattr(response, attribute)) for name, attribute in SCHEMA_FAMILIES]


ModelT = TypeVar("ModelT", bound=BaseModel)


def _decode(payload: bytes, model: type[ModelT]) -> ModelT:
    """Decode a JSON document into a wire model.

    Raises:
        DecodeError: If the payload is not a JSON object.
    """
    try:
        return model.model_validate_json(payload)
    except ValidationError as e:
        logger.warning(f"Could not decode {model.__name__}: {e.errors()[0]['msg']}")
        raise DecodeError() from e


def normalize_stop_monitoring(payload: bytes) -> list[StopMonitoringVisit]:
    """Decode a StopMonitoring response into its visit list.

    Args:
        payload: JSON body without byte-order mark.

    Returns:
        Visits of the first delivery, empty if the response has none.

    Raises:
        DecodeError: If the payload is not a JSON object.
    """
    return _decode(payload, StopMonitoringResponse).visits()


def normalize_stops(payload: bytes) -> list[FamilyRecords[StopRecord]]:
    """Decode a stops response into per-family stop records.

    Raises:
        DecodeError: If the payload is not a JSON object.
    """
    response = _decode(payload, DataObjectsResponse)
    return [
        FamilyRecords(name, family.stop_records() if family else [])
        for name, family in _families(response)
    ]


def normalize_lines(payload: bytes) -> list[FamilyRecords[LineRecord]]:
    """Decode a lines response into per-family line records.

    Raises:
        DecodeError: If the payload is not a JSON object.
    """
    response = _decode(payload, DataObjectsResponse)
    return [
        FamilyRecords(name, family.line_records() if family else [])
        for name, family in _families(response)
    ]
