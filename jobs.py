"""
Maintenance and scheduled jobs.

Run by cron (e.g. daily at midnight):

    python jobs.py expire-leases
    python jobs.py notify-upcoming

Run once on a new deployment:

    python jobs.py init-db       # create missing tables (Alembic is preferred)
    python jobs.py seed-admin    # first admin, from SEED_ADMIN_* or --email/--password
"""
import argparse
import logging
import sys
from datetime import date

from config import LOG_LEVEL, SEED_ADMIN_EMAIL, SEED_ADMIN_NAME, SEED_ADMIN_PASSWORD
from database import get_session_context, init_db
from services.lease_lifecycle import expire_leases, notify_upcoming_payments
from services.user_service import UserService

logger = logging.getLogger("jobs")

JOBS = {
    "expire-leases": (expire_leases, "{} lease(s) marked as expired."),
    "notify-upcoming": (notify_upcoming_payments, "{} payment reminder(s) created."),
}


def run(job: str, today: date = None) -> int:
    func, message = JOBS[job]
    with get_session_context() as db:
        count = func(db, today=today)
    logger.info(message.format(count))
    return count


def seed_admin(email: str, password: str, full_name: str = SEED_ADMIN_NAME) -> bool:
    """Returns True when an admin was created, False when accounts already existed."""
    with get_session_context() as db:
        user = UserService.seed_admin(db, email, password, full_name)
    return user is not None


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="LandlordPro jobs")
    parser.add_argument("job", choices=sorted(JOBS) + ["init-db", "seed-admin"])
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="Run as of this day (YYYY-MM-DD)")
    parser.add_argument("--email", default=SEED_ADMIN_EMAIL, help="seed-admin: admin email")
    parser.add_argument("--password", default=SEED_ADMIN_PASSWORD, help="seed-admin: admin password")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    try:
        if args.job == "init-db":
            init_db()
            logger.info("Database tables created")
        elif args.job == "seed-admin":
            seed_admin(args.email, args.password)
        else:
            run(args.job, args.date)
    except Exception:
        logger.exception("Job %s failed", args.job)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
