from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from .auth.service import AuthService
from .auth.tokens import TokenService
from .common.datetime_utils import utcnow
from .core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MAX_UPLOAD_BYTES
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .files.mysql_file_repository import MySQLFileRepository
from .files.repository import FileRepository
from .files.service import FileService
from .files.storage import ObjectStorage, S3ObjectStorage, StorageConfig
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import ProfileService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    departments_repo: DepartmentRepository
    employees_repo: EmployeeRepository
    files_repo: FileRepository
    storage: ObjectStorage

    token_service: TokenService
    auth_service: AuthService
    profile_service: ProfileService
    department_service: DepartmentService
    employee_service: EmployeeService
    file_service: FileService

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    users_repo: UserRepository,
    departments_repo: DepartmentRepository,
    employees_repo: EmployeeRepository,
    files_repo: FileRepository,
    storage: ObjectStorage,
    token_service: TokenService,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
    max_upload_bytes: int = MAX_UPLOAD_BYTES,
    clock: Callable[[], datetime] = utcnow,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services around already-built repositories.

    Tests call this with in-memory repositories.
    """
    return Container(
        users_repo=users_repo,
        departments_repo=departments_repo,
        employees_repo=employees_repo,
        files_repo=files_repo,
        storage=storage,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service, clock=clock),
        profile_service=ProfileService(users_repo, clock=clock),
        department_service=DepartmentService(
            departments_repo,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
            clock=clock,
        ),
        employee_service=EmployeeService(
            employees_repo,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
            clock=clock,
        ),
        file_service=FileService(
            files_repo,
            storage,
            max_bytes=max_upload_bytes,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
            clock=clock,
        ),
        conn=conn,
    )


def build_container(settings) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        files_repo=MySQLFileRepository(conn),
        storage=S3ObjectStorage(StorageConfig.from_mapping(settings.STORAGE_CONFIG)),
        token_service=TokenService(
            settings.SECRET_KEY,
            ttl=timedelta(days=int(getattr(settings, "TOKEN_TTL_DAYS", 7))),
        ),
        default_page_size=int(getattr(settings, "DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
        max_page_size=int(getattr(settings, "MAX_PAGE_SIZE", MAX_PAGE_SIZE)),
        max_upload_bytes=int(getattr(settings, "MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES)),
        conn=conn,
    )
