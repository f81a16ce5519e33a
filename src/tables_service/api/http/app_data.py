from dataclasses import dataclass

from tables_service.core.services import (
    DbSessionService,
    JwksService,
    JwtVerificationService,
    TableService,
)
from tables_service.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
    jwks_service: JwksService
    jwt_verify_service: JwtVerificationService
    table_service: TableService
