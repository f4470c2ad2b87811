"""
python -m scripts.seed_demo_business
"""

import sys

sys.path.insert(0, ".")

from dotenv import load_dotenv
load_dotenv()

from app.database import SessionLocal
from app.core.config import settings
from app.models.business import Business
from app.utils.onboarding_steps import STEP_COMPLETE


def seed_demo_business():
    """Create the shared demo business that prospects call during a demo session."""
    db = SessionLocal()

    try:
        business = db.get(Business, settings.DEMO_BUSINESS_ID)
        if business:
            print(f"Demo business already exists: {business.id} ({business.name})")
            return

        business = Business(
            id=settings.DEMO_BUSINESS_ID,
            name="Demo Med Spa",
            vertical="medspa",
            to_number=settings.DEMO_PHONE_NUMBER,
            demo_phone_number=settings.DEMO_PHONE_NUMBER,
            is_demo=True,
            is_active=True,
            onboarding_step=STEP_COMPLETE,
            hours={"mon-fri": "9am-6pm", "sat": "10am-2pm"},
            services=["Botox", "Dermal fillers", "Chemical peels"],
            faqs=[{"q": "Do you offer free consultations?", "a": "Yes, 15 minutes with a provider."}],
        )
        db.add(business)
        db.commit()
        print(f"Created demo business {business.id} answering {business.to_number}")

    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_demo_business()
