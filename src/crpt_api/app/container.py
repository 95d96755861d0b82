from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..core.domain.models import Window
from ..core.ports.clock_port import SystemClock
from ..core.usecases.load_document import LoadDocumentUseCase
from ..core.usecases.submit_document import SubmitDocumentUseCase
from ..infra.document_codec import JsonDocumentCodec
from ..infra.http_client import HttpClient
from ..infra.permit_pool import PermitPool
from ..infra.replenish_scheduler import ReplenishScheduler

logger = logging.getLogger(__name__)


def http_client_resource(timeout_seconds):
	logger.info(f"Initializing HTTP client (timeout: {timeout_seconds}s)")
	client = HttpClient(timeout_seconds=timeout_seconds)
	try:
		yield client
	finally:
		logger.debug("Closing HTTP client")
		client.close()


def replenish_scheduler_resource(permit_pool, window, initial_delay_seconds, clock):
	"""Start the replenishment timer for the permit pool; stop it on shutdown."""
	logger.info(f"Scheduling permit replenishment: {permit_pool.limit} per {window.length} {window.unit.value}")
	scheduler = ReplenishScheduler(
		permit_pool.replenish_to_full,
		window.seconds,
		initial_delay_seconds=initial_delay_seconds,
		clock=clock,
	)
	scheduler.start()
	try:
		yield scheduler
	finally:
		scheduler.stop()


class Container(containers.DeclarativeContainer):
	# Filled by CrptApiClient via from_pydantic()
	config = providers.Configuration()

	clock = providers.Singleton(SystemClock)

	window = providers.Singleton(Window, unit=config.window_unit, length=config.window_length)

	# Owned by this container; separate clients never share a pool
	permit_pool = providers.Singleton(PermitPool, limit=config.request_limit)

	scheduler = providers.Resource(
		replenish_scheduler_resource,
		permit_pool=permit_pool,
		window=window,
		initial_delay_seconds=config.initial_delay_seconds,
		clock=clock,
	)

	# Overridable with any TransportPort (e.g. test doubles)
	transport = providers.Resource(
		http_client_resource,
		timeout_seconds=config.http_timeout_seconds,
	)

	codec = providers.Singleton(JsonDocumentCodec)

	submit_uc = providers.Factory(
		SubmitDocumentUseCase,
		gate=permit_pool,
		codec=codec,
		transport=transport,
		api_url=config.api_url,
		timeout_seconds=config.http_timeout_seconds,
		hold_permits_until_window=config.hold_permits_until_window,
		signature_header=config.signature_header,
	)
	load_uc = providers.Factory(LoadDocumentUseCase, codec=codec)
