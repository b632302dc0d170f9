"""
Protobuf messages for the availability service.

package availability;

enum ConflictType {
  CONFLICT_TYPE_UNSPECIFIED = 0; TIME_BLOCK = 1; WORKING_HOURS = 2; BOOKING = 3; BUFFER_TIME = 4;
}
message TimeSlotRequest {
  string tenant_id = 1; string service_id = 2;
  google.protobuf.Timestamp start_time = 3; google.protobuf.Timestamp end_time = 4;
}
message ConflictInfo {
  ConflictType type = 1;
  google.protobuf.Timestamp overlap_start = 2; google.protobuf.Timestamp overlap_end = 3;
}
message TimeSlotResponse { bool is_available = 1; repeated ConflictInfo conflicts = 2; }
service AvailabilityService {
  rpc CheckTimeSlotAvailability(TimeSlotRequest) returns (TimeSlotResponse);
}

The descriptor is registered in the default pool at import time, the same way
protoc-generated ``_pb2`` modules do it.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory, timestamp_pb2


PACKAGE = 'availability'
CHECK_TIME_SLOT_AVAILABILITY_METHOD = (
    f'/{PACKAGE}.AvailabilityService/CheckTimeSlotAvailability'
)

_FIELD = descriptor_pb2.FieldDescriptorProto
_TIMESTAMP = f'.{timestamp_pb2.Timestamp.DESCRIPTOR.full_name}'

CONFLICT_TYPE_NAMES = (
    'CONFLICT_TYPE_UNSPECIFIED',
    'TIME_BLOCK',
    'WORKING_HOURS',
    'BOOKING',
    'BUFFER_TIME',
)


def _add_field(
    message: descriptor_pb2.DescriptorProto,
    *,
    name: str,
    number: int,
    type_: int,
    type_name: str = '',
    repeated: bool = False,
) -> None:
    field = message.field.add(
        name=name,
        number=number,
        type=type_,
        label=_FIELD.LABEL_REPEATED if repeated else _FIELD.LABEL_OPTIONAL,
    )
    # Scalars must leave type_name unset, not empty
    if type_name:
        field.type_name = type_name


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=f'{PACKAGE}/availability.proto',
        package=PACKAGE,
        syntax='proto3',
        dependency=[timestamp_pb2.DESCRIPTOR.name],
    )

    conflict_type = file_proto.enum_type.add(name='ConflictType')
    for number, name in enumerate(CONFLICT_TYPE_NAMES):
        conflict_type.value.add(name=name, number=number)

    request = file_proto.message_type.add(name='TimeSlotRequest')
    _add_field(request, name='tenant_id', number=1, type_=_FIELD.TYPE_STRING)
    _add_field(request, name='service_id', number=2, type_=_FIELD.TYPE_STRING)
    _add_field(request, name='start_time', number=3, type_=_FIELD.TYPE_MESSAGE, type_name=_TIMESTAMP)
    _add_field(request, name='end_time', number=4, type_=_FIELD.TYPE_MESSAGE, type_name=_TIMESTAMP)

    conflict = file_proto.message_type.add(name='ConflictInfo')
    _add_field(
        conflict,
        name='type',
        number=1,
        type_=_FIELD.TYPE_ENUM,
        type_name=f'.{PACKAGE}.ConflictType',
    )
    _add_field(conflict, name='overlap_start', number=2, type_=_FIELD.TYPE_MESSAGE, type_name=_TIMESTAMP)
    _add_field(conflict, name='overlap_end', number=3, type_=_FIELD.TYPE_MESSAGE, type_name=_TIMESTAMP)

    response = file_proto.message_type.add(name='TimeSlotResponse')
    _add_field(response, name='is_available', number=1, type_=_FIELD.TYPE_BOOL)
    _add_field(
        response,
        name='conflicts',
        number=2,
        type_=_FIELD.TYPE_MESSAGE,
        type_name=f'.{PACKAGE}.ConflictInfo',
        repeated=True,
    )

    service = file_proto.service.add(name='AvailabilityService')
    service.method.add(
        name='CheckTimeSlotAvailability',
        input_type=f'.{PACKAGE}.TimeSlotRequest',
        output_type=f'.{PACKAGE}.TimeSlotResponse',
    )
    return file_proto


DESCRIPTOR = descriptor_pool.Default().AddSerializedFile(
    _build_file_descriptor().SerializeToString()
)

TimeSlotRequest = message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name['TimeSlotRequest'])
ConflictInfo = message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name['ConflictInfo'])
TimeSlotResponse = message_factory.GetMessageClass(
    DESCRIPTOR.message_types_by_name['TimeSlotResponse']
)
