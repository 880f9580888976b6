from database import SessionLocal, engine
from config.settings import settings
import models  # registers every table on Base.metadata
from models import Base
from models.user import User, UserRole, UserStatus
from models.settings import Currency, Color, Size, MaterialType, UnitOfMeasure
from auth import get_password_hash
import logging

logger = logging.getLogger(__name__)

DEFAULT_LOOKUPS = {
    Color: ["Black", "White", "Navy", "Grey", "Red"],
    Size: ["XS", "S", "M", "L", "XL", "XXL"],
    MaterialType: ["Fabric", "Trim", "Thread", "Label", "Packaging"],
    UnitOfMeasure: ["Meter", "Yard", "Piece", "Cone", "Kg"],
}

def create_superadmin():
    """Create superadmin user if it doesn't exist."""
    db = SessionLocal()
    try:
        # Check if superadmin already exists
        existing_superadmin = db.query(User).filter(
            User.role == UserRole.SUPERADMIN
        ).first()

        if existing_superadmin:
            logger.info("Superadmin already exists")
            return existing_superadmin

        password = settings.SUPERADMIN_PASSWORD
        if not password:
            password = "admin123"
            logger.warning(
                f"SUPERADMIN_PASSWORD not set; {settings.SUPERADMIN_USERNAME} created with the default password (CHANGE THIS!)"
            )

        superadmin = User(
            username=settings.SUPERADMIN_USERNAME,
            password=get_password_hash(password),
            full_name="Super Administrator",
            role=UserRole.SUPERADMIN,
            status=UserStatus.ACTIVE
        )

        db.add(superadmin)
        db.commit()
        db.refresh(superadmin)

        logger.info(f"Superadmin user {superadmin.username} created successfully")
        return superadmin

    except Exception as e:
        logger.error(f"Error creating superadmin: {e}")
        db.rollback()
        raise
    finally:
        db.close()

def create_default_currency():
    """Create the configured default currency when no currency exists."""
    db = SessionLocal()
    try:
        if db.query(Currency).first():
            logger.info("Currencies already exist")
            return

        db.add(Currency(value=settings.DEFAULT_CURRENCY, is_default=True))
        db.commit()
        logger.info(f"Default currency {settings.DEFAULT_CURRENCY} created")

    except Exception as e:
        logger.error(f"Error creating default currency: {e}")
        db.rollback()
        raise
    finally:
        db.close()

def seed_lookup_values():
    """Seed colors, sizes, material types and units of measure."""
    db = SessionLocal()
    try:
        for model, values in DEFAULT_LOOKUPS.items():
            if db.query(model).first():
                logger.info(f"{model.__tablename__} already seeded")
                continue
            for value in values:
                db.add(model(value=value))
            logger.info(f"Seeded {len(values)} {model.__tablename__}")
        db.commit()

    except Exception as e:
        logger.error(f"Error seeding lookup values: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def init_database():
    """Initialize database with tables and seed data."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")

    create_superadmin()
    create_default_currency()
    seed_lookup_values()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
