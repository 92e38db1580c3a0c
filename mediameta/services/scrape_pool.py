"""
Pool borne pour les scrapes en lot.

Execute une liste de jobs (coroutines) avec au plus worker_count jobs en
cours simultanement. Chaque job produit sa valeur ou son exception : un
echec n'annule pas les autres jobs du lot.
"""

import asyncio
from typing import Any, Awaitable, Callable, Sequence, Union

from loguru import logger

DEFAULT_WORKER_COUNT = 4

ScrapeJob = Callable[[], Awaitable[Any]]


class ScrapePool:
    """
    Execution concurrente bornee de jobs de scrape.

    Example:
        pool = ScrapePool(worker_count=4)
        outcomes = await pool.run([
            lambda: provider.get_metadata(options_a),
            lambda: provider.get_metadata(options_b),
        ])
    """

    def __init__(self, worker_count: int = DEFAULT_WORKER_COUNT) -> None:
        if worker_count < 1:
            raise ValueError(f"worker_count doit etre >= 1 (recu {worker_count})")
        self.worker_count = worker_count

    async def run(self, jobs: Sequence[ScrapeJob]) -> list[Union[Any, BaseException]]:
        """
        Execute les jobs et retourne leurs resultats dans l'ordre des jobs.

        Returns:
            Pour chaque job, sa valeur de retour ou l'exception levee
        """
        if not jobs:
            return []

        semaphore = asyncio.Semaphore(self.worker_count)

        async def run_one(job: ScrapeJob) -> Any:
            async with semaphore:
                return await job()

        logger.debug(f"ScrapePool: {len(jobs)} job(s), {self.worker_count} worker(s)")
        outcomes = await asyncio.gather(*(run_one(job) for job in jobs), return_exceptions=True)

        failed = sum(1 for outcome in outcomes if isinstance(outcome, BaseException))
        if failed:
            logger.warning(f"ScrapePool: {failed}/{len(jobs)} job(s) en echec")
        return list(outcomes)
