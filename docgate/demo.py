"""Demo runner: submits the same sample document ten times.

Each copy gets ``doc_id`` "1".."10" and is sent through a limiter of five
requests per second, so the run takes about two windows.

Usage:
    docgate-demo [--count 10] [--max-requests 5] [--window-seconds 1.0]
"""

from __future__ import annotations

import argparse
import logging
from concurrent.futures import wait

from docgate.core.config import LimiterSettings, settings
from docgate.core.logging import configure_logging
from docgate.schemas.document import Description, Document, Product
from docgate.services.dispatcher import Sent
from docgate.services.submission_service import build_submission_service

logger = logging.getLogger("docgate.demo")


def build_sample_document(doc_id: str) -> Document:
    """Return the sample document used by the demo."""

    product = Product(
        certificate_document="testCert",
        certificate_document_date="2020-01-23",
        certificate_document_number="123",
        owner_inn="123456789",
        producer_inn="123456789",
        production_date="2020-01-23",
        tnved_code="testTnvedCode",
        uit_code="testUnitCode",
        uitu_code="testUituCode",
    )
    return Document(
        description=Description(participantInn="123456789"),
        doc_id=doc_id,
        doc_status="testStatus",
        doc_type="testDocType",
        importRequest=True,
        owner_inn="123456789",
        participant_inn="123456789",
        producer_inn="123456789",
        production_date="2020-01-23",
        production_type="testProductionType",
        products=[product],
        reg_date="2020-01-23",
        reg_number="123456789",
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--count", type=int, default=10)
    parser.add_argument("--max-requests", type=int, default=settings.limiter.max_requests)
    parser.add_argument("--window-seconds", type=float, default=settings.limiter.window_seconds)
    parser.add_argument("--signature", default=settings.api.signature)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the demo; returns the number of failed submissions as exit code."""

    args = _parse_args(argv)
    configure_logging(settings.log)

    cfg = settings.model_copy(
        update={
            "limiter": LimiterSettings(
                window_seconds=args.window_seconds,
                max_requests=args.max_requests,
                policy=settings.limiter.policy,
            )
        }
    )

    with build_submission_service(cfg) as service:
        tickets = [
            service.submit(build_sample_document(str(i)), args.signature)
            for i in range(1, args.count + 1)
        ]
        wait([ticket.future for ticket in tickets])

    failed = 0
    for ticket in tickets:
        outcome = ticket.future.result()
        if isinstance(outcome, Sent):
            logger.info("demo.document_created", extra={"submission_id": ticket.submission_id})
        else:
            failed += 1
            logger.warning(
                "demo.document_failed",
                extra={
                    "submission_id": ticket.submission_id,
                    "error_code": outcome.error.code,
                    "error_message": outcome.error.message,
                },
            )
    return failed


if __name__ == "__main__":
    raise SystemExit(main())
