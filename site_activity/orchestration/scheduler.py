"""
Scheduler - Orchestration Layer

Periodic snapshot refresh for one query.
"""

import schedule
import time
from typing import Optional
import logging

from ..extract.errors import SiteActivityError
from ..extract.models import SiteActivityQuery
from .pipeline import SiteActivityPipeline

logger = logging.getLogger(__name__)


class SnapshotScheduler:
    """Refreshes a local snapshot of sites every `every_minutes` minutes"""

    def __init__(
        self,
        pipeline: SiteActivityPipeline,
        query: SiteActivityQuery,
        every_minutes: int = 60,
    ):
        if every_minutes < 1:
            raise ValueError(f"every_minutes must be >= 1, got {every_minutes}")
        self.pipeline = pipeline
        self.query = query
        self.every_minutes = every_minutes
        self.running = False
        self.jobs = schedule.Scheduler()

    def refresh(self) -> Optional[dict]:
        """Run one snapshot; upstream failures are logged and retried next tick"""
        logger.info("🔄 Running scheduled snapshot refresh...")
        try:
            return self.pipeline.run_snapshot(self.query)
        except SiteActivityError as e:
            logger.error(f"❌ Scheduled refresh failed: {e}")
            return None

    def start(self):
        """Start the scheduler loop, refreshing once immediately"""
        logger.info(f"🚀 Starting snapshot scheduler (every {self.every_minutes} min)")

        self.jobs.every(self.every_minutes).minutes.do(self.refresh)
        self.running = True
        self.refresh()

        try:
            while self.running:
                self.jobs.run_pending()
                time.sleep(1)

        except KeyboardInterrupt:
            logger.info("🛑 Scheduler stopped by user")
            self.running = False

    def stop(self):
        """Stop the scheduler"""
        logger.info("🛑 Stopping scheduler...")
        self.running = False
        self.jobs.clear()
