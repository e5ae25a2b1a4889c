from dotenv import load_dotenv


def main() -> None:
    load_dotenv()

    # Imported after load_dotenv so DATABASE_URL from .env is honoured
    from app.config import settings
    from app.logger import setup_logging
    from app.seed import seed_sample_data
    from db.session import get_db_session, init_db

    setup_logging(settings.log_level)
    init_db()

    with get_db_session() as db:
        counts = seed_sample_data(db)

    print("Seeding complete:", counts)


if __name__ == "__main__":
    main()
