"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.metrics.booking_metrics import metrics as booking_metrics
from src.service.tour_booking.driven_adapter.notification.mock_notification_gateway import (
    MockNotificationGateway,
)
from src.service.tour_booking.driven_adapter.notification.smtp_notification_gateway import (
    SmtpNotificationGateway,
)
from src.service.tour_booking.driven_adapter.repo.booking_repo_memory_impl import (
    BookingRepoMemoryImpl,
)
from src.service.tour_booking.driven_adapter.repo.booking_repo_sql_impl import (
    BookingCommandRepoSqlImpl,
    BookingQueryRepoSqlImpl,
)
from src.service.tour_booking.driven_adapter.repo.tour_catalog_memory_impl import (
    TourCatalogMemoryImpl,
)
from src.service.tour_booking.driven_adapter.repo.tour_catalog_sql_impl import TourCatalogSqlImpl
from src.service.tour_booking.driven_adapter.repo.user_query_repo_sql_impl import (
    UserQueryRepoSqlImpl,
)
from src.service.tour_booking.driven_adapter.repo.user_repo_memory_impl import UserRepoMemoryImpl
from src.service.tour_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (only touched when STORE_BACKEND=postgres)
    database = providers.Singleton(Database)

    # Metrics (process-wide prometheus registry)
    metrics = providers.Object(booking_metrics)

    # In-memory store; one booking repo instance serves both ports
    memory_booking_repo = providers.Singleton(BookingRepoMemoryImpl)
    memory_tour_catalog = providers.Singleton(TourCatalogMemoryImpl)
    memory_user_repo = providers.Singleton(UserRepoMemoryImpl)

    # Repositories (selected by STORE_BACKEND)
    booking_command_repo = providers.Selector(
        config_service.provided.STORE_BACKEND,
        memory=memory_booking_repo,
        postgres=providers.Singleton(
            BookingCommandRepoSqlImpl, session_factory=database.provided.session
        ),
    )
    booking_query_repo = providers.Selector(
        config_service.provided.STORE_BACKEND,
        memory=memory_booking_repo,
        postgres=providers.Singleton(
            BookingQueryRepoSqlImpl, session_factory=database.provided.session
        ),
    )
    tour_catalog = providers.Selector(
        config_service.provided.STORE_BACKEND,
        memory=memory_tour_catalog,
        postgres=providers.Singleton(
            TourCatalogSqlImpl, session_factory=database.provided.session
        ),
    )
    user_query_repo = providers.Selector(
        config_service.provided.STORE_BACKEND,
        memory=memory_user_repo,
        postgres=providers.Singleton(
            UserQueryRepoSqlImpl, session_factory=database.provided.session
        ),
    )

    # Notifications (selected by NOTIFICATION_BACKEND)
    notification_gateway = providers.Selector(
        config_service.provided.NOTIFICATION_BACKEND,
        log=providers.Singleton(MockNotificationGateway),
        smtp=providers.Singleton(SmtpNotificationGateway, config=config_service),
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
