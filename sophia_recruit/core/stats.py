"""
Dashboard statistics
"""
from typing import Dict, List, Sequence

import pandas as pd

from sophia_recruit.models import Applicant, ApplicationStatus, ChartData, STATUS_LABELS


def status_chart(applicants: Sequence[Applicant]) -> List[ChartData]:
    """One bar per status, in enum order, zero-filled"""
    df = pd.DataFrame({'status': [a.status.value for a in applicants]}, dtype='object')
    counts = df['status'].value_counts() if not df.empty else pd.Series(dtype='int64')

    return [
        ChartData(name=STATUS_LABELS[status.value], value=int(counts.get(status.value, 0)))
        for status in ApplicationStatus
    ]


def dashboard_stats(applicants: Sequence[Applicant]) -> Dict:
    chart = status_chart(applicants)
    hired_label = STATUS_LABELS[ApplicationStatus.HIRED.value]
    return {
        'total': len(applicants),
        'hired': next(entry.value for entry in chart if entry.name == hired_label),
        'chart': chart,
    }
