from __future__ import annotations

from dataclasses import dataclass

from .accommodations.mysql_accommodation_gateway import MySQLAccommodationGateway
from .accommodations.service import AccommodationService
from .admins.mysql_admin_gateway import MySQLAdminGateway
from .auth.service import AuthService
from .database.connection import DatabaseConnection, DBConfig
from .medical.mysql_medical_gateway import MySQLMedicalProfileGateway
from .medical.service import MedicalProfileService
from .permits.mysql_permit_gateway import MySQLPermitGateway
from .permits.service import PermitService
from .pilgrims.mysql_pilgrim_gateway import MySQLPilgrimGateway
from .pilgrims.service import PilgrimService
from .transport.mysql_transport_gateway import MySQLTransportScheduleGateway
from .transport.service import TransportService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    pilgrims_gateway: MySQLPilgrimGateway
    medical_gateway: MySQLMedicalProfileGateway
    accommodations_gateway: MySQLAccommodationGateway
    transport_gateway: MySQLTransportScheduleGateway
    permits_gateway: MySQLPermitGateway
    admins_gateway: MySQLAdminGateway

    auth_service: AuthService
    pilgrim_service: PilgrimService
    medical_service: MedicalProfileService
    accommodation_service: AccommodationService
    transport_service: TransportService
    permit_service: PermitService


def build_container(*, db_config: dict, cascade_delete: bool = False) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    pilgrims_gateway = MySQLPilgrimGateway(conn, cascade_delete=cascade_delete)
    medical_gateway = MySQLMedicalProfileGateway(conn)
    accommodations_gateway = MySQLAccommodationGateway(conn)
    transport_gateway = MySQLTransportScheduleGateway(conn)
    permits_gateway = MySQLPermitGateway(conn)
    admins_gateway = MySQLAdminGateway(conn)

    return Container(
        conn=conn,
        pilgrims_gateway=pilgrims_gateway,
        medical_gateway=medical_gateway,
        accommodations_gateway=accommodations_gateway,
        transport_gateway=transport_gateway,
        permits_gateway=permits_gateway,
        admins_gateway=admins_gateway,
        auth_service=AuthService(admins_gateway),
        pilgrim_service=PilgrimService(
            pilgrims_gateway,
            medical=medical_gateway,
            accommodations=accommodations_gateway,
            transport=transport_gateway,
            permits=permits_gateway,
        ),
        medical_service=MedicalProfileService(medical_gateway),
        accommodation_service=AccommodationService(accommodations_gateway),
        transport_service=TransportService(transport_gateway),
        permit_service=PermitService(permits_gateway),
    )
