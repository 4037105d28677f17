# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Sample catalog data for local development.

Replaces all universities, programs and enquiries with a small demo
catalog, then recomputes each university's fee range.
"""

import logging
from decimal import Decimal

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.catalog.fee_range import FeeRangeAggregator
from src.infrastructure.database.models import Enquiry, Program, University
from src.infrastructure.database.models.base import new_uuid
from src.models.common import EnquirySource, EnquiryStatus
from src.utils.slug import program_slug, slugify

logger = logging.getLogger(__name__)

UNIVERSITIES = [
    {
        "name": "Amity University Online",
        "short_name": "Amity",
        "location": "Noida, Uttar Pradesh",
        "established_year": 2005,
        "rating": "A+",
        "accreditations": ["NAAC A+", "UGC-DEB", "AICTE", "WES"],
        "approvals": ["UGC", "AIU", "ACU"],
        "facilities": ["Digital Library", "Virtual Labs", "Placement Support"],
        "highlights": ["40+ Online Programs", "Global Recognition", "EMI Options Available"],
        "featured": True,
    },
    {
        "name": "Manipal University Jaipur",
        "short_name": "MUJ",
        "location": "Jaipur, Rajasthan",
        "established_year": 2011,
        "rating": "A+",
        "accreditations": ["NAAC A+", "UGC-DEB"],
        "approvals": ["UGC", "AICTE"],
        "facilities": ["Online Library", "Career Services"],
        "highlights": ["Industry Projects", "Live Lectures"],
        "featured": True,
    },
    {
        "name": "Lovely Professional University",
        "short_name": "LPU",
        "location": "Phagwara, Punjab",
        "established_year": 2005,
        "rating": "A++",
        "accreditations": ["NAAC A++", "UGC-DEB"],
        "approvals": ["UGC", "AIU"],
        "facilities": ["Virtual Classrooms", "Placement Support"],
        "highlights": ["Affordable Fees", "Scholarships"],
        "featured": False,
    },
    {
        "name": "NMIMS Global Access",
        "short_name": "NMIMS",
        "location": "Mumbai, Maharashtra",
        "established_year": 1981,
        "rating": "A++",
        "accreditations": ["NAAC A++", "UGC-DEB"],
        "approvals": ["UGC"],
        "facilities": ["Mobile Learning App", "Alumni Network"],
        "highlights": ["40 Years of Excellence", "Industry Faculty"],
        "featured": True,
    },
]

PROGRAMS = [
    ("Master of Business Administration (MBA)", "MBA", "Postgraduate", "2 Years", "150000", True),
    ("MBA in Finance", "MBA", "Postgraduate", "2 Years", "175000", True),
    ("MBA in Marketing", "MBA", "Postgraduate", "2 Years", "165000", False),
    ("Master of Computer Applications (MCA)", "MCA", "Postgraduate", "2 Years", "120000", True),
    ("MCA in Data Science", "MCA", "Postgraduate", "2 Years", "140000", False),
    ("Bachelor of Business Administration (BBA)", "BBA", "Undergraduate", "3 Years", "90000", True),
    ("Bachelor of Computer Applications (BCA)", "BCA", "Undergraduate", "3 Years", "85000", False),
    ("Bachelor of Commerce (B.Com)", "B.Com", "Undergraduate", "3 Years", "60000", False),
    ("Master of Commerce (M.Com)", "M.Com", "Postgraduate", "2 Years", "80000", False),
    ("Bachelor of Arts (BA)", "BA", "Undergraduate", "3 Years", "45000", False),
]

ENQUIRIES = [
    ("Rahul Sharma", "rahul.sharma@example.com", "9876543210", EnquiryStatus.NEW),
    ("Priya Patel", "priya.patel@example.com", "9876543211", EnquiryStatus.CONTACTED),
    ("Amit Kumar", "amit.kumar@example.com", "9876543212", EnquiryStatus.INTERESTED),
    ("Sneha Reddy", "sneha.reddy@example.com", "9876543213", EnquiryStatus.CONVERTED),
    ("Vikram Singh", "vikram.singh@example.com", "9876543214", EnquiryStatus.NEW),
]


def _university(data: dict) -> University:
    name = data["name"]
    return University(
        id=new_uuid(),
        slug=slugify(name),
        description=f"{name} offers UGC-entitled online degree programs.",
        min_fee=Decimal("0"),
        max_fee=Decimal("0"),
        is_active=True,
        **data,
    )


def _program(university: University, row: tuple) -> Program:
    name, category, level, duration, fee, featured = row
    return Program(
        id=new_uuid(),
        university_id=university.id,
        name=name,
        slug=program_slug(name),
        category=category,
        level=level,
        duration=duration,
        fee=Decimal(fee),
        description=f"{name} at {university.name}.",
        featured=featured,
        is_active=True,
    )


async def seed_sample_data(session: AsyncSession) -> dict[str, int]:
    """Replace the catalog with sample data.

    Programs are spread across the universities round-robin.

    Args:
        session: Database session.

    Returns:
        Counts of inserted universities, programs and enquiries.
    """
    logger.info("Clearing existing catalog data")
    await session.execute(delete(Enquiry))
    await session.execute(delete(Program))
    await session.execute(delete(University))

    universities = [_university(dict(data)) for data in UNIVERSITIES]
    session.add_all(universities)
    await session.flush()

    programs = [
        _program(universities[i % len(universities)], row)
        for i, row in enumerate(PROGRAMS)
    ]
    session.add_all(programs)
    await session.flush()

    enquiries = [
        Enquiry(
            id=new_uuid(),
            name=name,
            email=email,
            phone=phone,
            message="I would like to know more about this program.",
            program_id=programs[i % len(programs)].id,
            university_id=programs[i % len(programs)].university_id,
            source=EnquirySource.WEBSITE.value,
            status=status.value,
        )
        for i, (name, email, phone, status) in enumerate(ENQUIRIES)
    ]
    session.add_all(enquiries)
    await session.commit()

    ranges = await FeeRangeAggregator(session).recompute_many(
        [university.id for university in universities]
    )
    logger.info("Fee ranges recomputed for %d universities", len(ranges))

    counts = {
        "universities": len(universities),
        "programs": len(programs),
        "enquiries": len(enquiries),
    }
    logger.info("Sample data seeded: %s", counts)
    return counts
