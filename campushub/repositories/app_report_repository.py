from typing import List, Optional
from campushub.extensions import db
from campushub.models import AppReport
from campushub.models.enums import ReportStatus


class AppReportRepository:
    @staticmethod
    def add(attrs):
        report = AppReport(**attrs)
        db.session.add(report)
        db.session.commit()
        return report

    @staticmethod
    def get(report_id: int) -> AppReport:
        return AppReport.query.filter_by(id=report_id).first()

    @staticmethod
    def list_reports(status: Optional[ReportStatus] = None) -> List[AppReport]:
        query = AppReport.query
        if status is not None:
            query = query.filter(AppReport.status == status)
        return query.order_by(AppReport.created_at.desc(), AppReport.id.desc()).all()

    @staticmethod
    def update_status(report: AppReport, status: ReportStatus):
        report.status = status
        db.session.commit()
        return report

    @staticmethod
    def count(status: Optional[ReportStatus] = None) -> int:
        query = AppReport.query
        if status is not None:
            query = query.filter(AppReport.status == status)
        return query.count()
