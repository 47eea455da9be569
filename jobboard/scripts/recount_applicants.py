"""
Resync cached job applicant counts with the applications table.
Usage: python -m jobboard.scripts.recount_applicants
"""
from jobboard.database import SessionLocal, ensure_tables_exist
from jobboard.repos.job_repo import recount_applicants


def main():
    ensure_tables_exist()
    db = SessionLocal()
    try:
        corrected = recount_applicants(db)
        print(f"Applicant counts checked: {corrected} job(s) corrected.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
