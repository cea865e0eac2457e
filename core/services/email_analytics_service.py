"""Delivery statistics computed from the ``email_logs`` table."""

from collections import Counter, defaultdict
from datetime import date

from core.enums import EmailLogStatus
from core.models import EmailLog
from core.schemas.email import DeliveryStats, DomainDeliveryStats


class EmailAnalyticsService:
    """Aggregates logged delivery attempts for the admin dashboard."""

    def get_delivery_stats(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> DeliveryStats:
        """Count logged deliveries by status and recipient domain.

        Args:
            start_date: Include rows created on or after this day
            end_date: Include rows created on or before this day

        Returns:
            Status counts, success percentage and per-domain breakdown
        """
        queryset = EmailLog.objects.all()
        if start_date:
            queryset = queryset.filter(created_at__date__gte=start_date)
        if end_date:
            queryset = queryset.filter(created_at__date__lte=end_date)

        rows = list(queryset.values_list("recipient_email", "status"))
        by_status = Counter(status for _, status in rows)
        total = len(rows)
        sent = by_status[EmailLogStatus.SENT.value]

        return DeliveryStats(
            total=total,
            sent=sent,
            failed=by_status[EmailLogStatus.FAILED.value],
            pending=by_status[EmailLogStatus.PENDING.value],
            bounced=by_status[EmailLogStatus.BOUNCED.value],
            success_rate=round(sent / total * 100, 2) if total else 0.0,
            by_domain=self._by_domain(rows),
        )

    @staticmethod
    def _by_domain(rows: list[tuple[str, str]]) -> list[DomainDeliveryStats]:
        counts: dict[str, Counter] = defaultdict(Counter)
        for email, status in rows:
            domain = email.rsplit("@", 1)[-1].lower() if "@" in email else "unknown"
            counts[domain][status] += 1

        stats = [
            DomainDeliveryStats(
                domain=domain,
                total=sum(counter.values()),
                sent=counter[EmailLogStatus.SENT.value],
                failed=counter[EmailLogStatus.FAILED.value],
            )
            for domain, counter in counts.items()
        ]
        stats.sort(key=lambda s: (-s.total, s.domain))
        return stats


email_analytics_service = EmailAnalyticsService()
