import logging

from models.reports import Report

logger = logging.getLogger(__name__)

SAMPLE_REPORTS = [
    {
        "type": "Warranty",
        "title": "Vehicle Equipment Warranty Claim",
        "content": "Police vehicle PV-001 radio equipment malfunction. Equipment still under warranty, "
                   "request manufacturer assessment and replacement.",
        "status": "Pending",
        "priority": "Medium",
    },
    {
        "type": "Incident",
        "title": "Monthly Crime Statistics Report",
        "content": "Crime statistics for the month: incident types, resolution rates and "
                   "geographical distribution of reported crimes.",
        "status": "Completed",
        "priority": "Low",
    },
    {
        "type": "Investigation",
        "title": "Theft Investigation Summary",
        "content": "Investigation report for multiple theft incidents in the downtown area.",
        "status": "Under Review",
        "priority": "High",
    },
    {
        "type": "Case Summary",
        "title": "Vehicle Accident Case Report",
        "content": "Case summary for a vehicle accident on Main Street, with police response "
                   "and witness statements.",
        "status": "Approved",
        "priority": "Medium",
    },
]


def seed_reports():
    if Report.count():
        logger.info("Reports data already exists, skipping seed")
        return 0
    for item in SAMPLE_REPORTS:
        Report.create(dict(item, requestedBy="admin"))
    logger.info("Seeded %d reports", len(SAMPLE_REPORTS))
    return len(SAMPLE_REPORTS)
