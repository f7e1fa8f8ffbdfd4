"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from facefind_lifecycle.adapters.rekognition_collection_client import (
    RekognitionCollectionClient,
)
from facefind_lifecycle.adapters.resend_email_sender import HttpxResendEmailSender
from facefind_lifecycle.adapters.s3_blob_store import S3BlobStore
from facefind_lifecycle.adapters.supabase_event_repository import (
    SupabaseEventRepository,
)
from facefind_lifecycle.adapters.supabase_organizer_repository import (
    SupabaseOrganizerRepository,
)
from facefind_lifecycle.adapters.supabase_photo_repository import (
    SupabasePhotoRepository,
)
from facefind_lifecycle.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from facefind_lifecycle.config import Settings
from facefind_lifecycle.services.face_collections import CollectionRetirer
from facefind_lifecycle.services.grace_period import GracePeriodTransitioner
from facefind_lifecycle.services.lifecycle import LifecycleRunner
from facefind_lifecycle.services.notifications import (
    EmailSender,
    NullEmailSender,
    OrganizerNotifier,
)
from facefind_lifecycle.services.retention import RetentionTransitioner


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    grace_period_transitioner: GracePeriodTransitioner
    retention_transitioner: RetentionTransitioner
    runner: LifecycleRunner
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    event_repository = SupabaseEventRepository(
        supabase_client, table=resolved_settings.events_table
    )
    session_repository = SupabaseSessionRepository(
        supabase_client, table=resolved_settings.sessions_table
    )
    photo_repository = SupabasePhotoRepository(
        supabase_client, table=resolved_settings.photos_table
    )
    organizer_repository = SupabaseOrganizerRepository(
        supabase_client, table=resolved_settings.users_table
    )
    blob_store = S3BlobStore.create(
        bucket=resolved_settings.s3_bucket_name, region=resolved_settings.aws_region
    )
    collection_client = RekognitionCollectionClient.create(
        region=resolved_settings.aws_region
    )

    email_client: HttpxResendEmailSender | None = None
    sender: EmailSender
    if resolved_settings.resend_api_key:
        email_client = HttpxResendEmailSender.create(
            api_key=resolved_settings.resend_api_key,
            from_address=resolved_settings.email_from,
        )
        sender = email_client
    else:
        sender = NullEmailSender()
    notifier = OrganizerNotifier(
        organizers=organizer_repository,
        sender=sender,
        app_url=resolved_settings.app_url,
    )

    grace_period_transitioner = GracePeriodTransitioner(
        events=event_repository,
        sessions=session_repository,
        notifier=notifier,
        session_batch_size=resolved_settings.session_batch_size,
    )
    retention_transitioner = RetentionTransitioner(
        events=event_repository,
        photos=photo_repository,
        blobs=blob_store,
        retirer=CollectionRetirer(collection_client),
        notifier=notifier,
        photo_batch_size=resolved_settings.photo_batch_size,
        blob_batch_size=resolved_settings.blob_batch_size,
    )
    runner = LifecycleRunner(
        jobs={
            grace_period_transitioner.name: grace_period_transitioner,
            retention_transitioner.name: retention_transitioner,
        }
    )

    async def close_resources() -> None:
        if email_client is not None:
            await email_client.close()

    return AppContainer(
        settings=resolved_settings,
        grace_period_transitioner=grace_period_transitioner,
        retention_transitioner=retention_transitioner,
        runner=runner,
        close_resources=close_resources,
    )
