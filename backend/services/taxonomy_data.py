"""
Static category table for Santa Barbara 211 searches.

Declaration order matters: keyword matching walks the table top to bottom
and the first hit wins.
"""
from typing import Dict, Tuple

from domain.models import CodeEntry, KeywordEntry, SubcategoryEntry, TaxonomyEntry

S = SubcategoryEntry

CATEGORY_TABLE: Tuple[TaxonomyEntry, ...] = (
    CodeEntry(
        category_id="housing",
        label="Housing",
        taxonomy_code="BH-1800.8500",
        keywords=("housing", "shelter", "homeless", "rent assistance", "temporary housing"),
        subcategories=(
            S("domestic-violence-shelters", "Domestic Violence Shelters", "BH-1800.1500-100"),
            S("homeless-shelters", "Homeless Shelters", "BH-1800.8500"),
            S("maternity-homes", "Maternity Homes", "LJ-5000.5000"),
            S("senior-housing", "Senior Housing", "BH-8500.8000"),
            S("youth-shelters", "Youth Shelters", "BH-1800.1500-960"),
            S("low-income-rental-housing", "Low Income Rental Housing", "BH-7000.4600"),
            S("section-8-voucher", "Section 8 Voucher / Housing Authority", "BH-8300.3000"),
            S("bathing-facilities", "Bathing Facilities", "BH-1800.3500"),
            S("temporary-mailing-address", "Temporary Mailing Address", "BM-6500.6500-850"),
            S("home-maintenance-repair", "Home Maintenance & Minor Repair Services", "PH-3300.2750"),
        ),
    ),
    CodeEntry(
        category_id="food",
        label="Food",
        taxonomy_code="BD-5000",
        keywords=("food", "meals", "food pantry", "food stamps", "nutrition", "calfresh", "wic"),
        subcategories=(
            S("meals", "Hot Meals", "BD-5000"),
            S("food-pantries", "Food Pantries", "BD-1800.2000"),
            S("calfresh", "CalFresh (Food Stamps)", "NL-6000.2000"),
            S("wic", "Women, Infants, & Children (WIC)", "NL-6000.9500"),
            S("senior-nutrition", "Senior Nutrition Programs", "BD-5000.8000"),
            S("school-meals", "School Meal Programs", "BD-1800.7500"),
            S("emergency-food", "Emergency Food Assistance", "BD-1800.2000"),
            S("home-delivery-meals", "Home Delivery Meals", "BD-5000.3500"),
            S("pet-food", "Pet Food", "PD-6250.6600"),
        ),
    ),
    CodeEntry(
        category_id="healthcare",
        label="Health Care",
        taxonomy_code="LN",
        keywords=("healthcare", "medical", "clinic", "hospital", "health insurance", "medicaid", "medicare"),
        subcategories=(
            S("clinics-urgent-care", "Clinics & Urgent Care", "LN"),
            S("hospitals", "Hospitals", "LL-3000"),
            S("medicaid", "Medicaid", "NL-5000.5000"),
            S("medicare", "Medicare", "NS-8000.5000"),
            S("prescription-assistance", "Prescription Drug Patient Assistance Programs", "LH-6700.6300"),
            S("immunizations", "Immunizations", "LT-3400"),
            S("prenatal-care", "Prenatal Care", "LJ-5000.6600"),
            S("reproductive-health", "Reproductive Health"),
        ),
    ),
    CodeEntry(
        category_id="mental-wellness",
        label="Mental Wellness",
        taxonomy_code="RP-1400",
        keywords=("mental health", "counseling", "therapy", "crisis", "depression", "anxiety", "psychiatric"),
        subcategories=(
            S("general-counseling", "General Counseling", "RP-1400.2500"),
            S("bereavement-grief", "Bereavement and Grief Counseling", "RP-1400.8000-100"),
            S("marriage-counseling", "Marriage Counseling", "RP-1400.8000-500"),
            S("suicide-counseling", "Suicide Counseling", "RP-1400.8000-825"),
            S("youth-counseling", "Adolescent/Youth Counseling", "RP-1400.8000-050"),
            S("crisis-hotlines", "General Crisis Intervention Hotlines", "RP-1500.1400-250"),
            S("support-circles", "Peer Support Circles"),
        ),
    ),
    CodeEntry(
        category_id="substance-use",
        label="Substance Use",
        taxonomy_code="RX-8250",
        keywords=("substance abuse", "addiction", "alcohol", "drugs", "detox", "recovery", "rehabilitation"),
        subcategories=(
            S("alcohol-detox", "Alcohol Detox", "RX-1700.0500"),
            S("drug-detox", "Drug Detoxification", "RX-1700.1700"),
            S("alcoholism-counseling", "Alcoholism Counseling", "RX-8450.8000-050"),
            S("drug-counseling", "Drug Abuse Counseling", "RX-8450.8000-180"),
            S("sober-living", "Sober Living Homes", "RX-8500.8000"),
        ),
    ),
    CodeEntry(
        category_id="children-family",
        label="Children & Family",
        taxonomy_code="PH-2360.2400",
        keywords=("children", "family", "childcare", "parenting", "child support", "head start"),
        subcategories=(
            S("childcare-referrals", "Child Care Provider Referrals", "PH-2400.1500"),
            S("head-start", "Head Start", "HD-1800.3000"),
            S("child-support", "Child Support", "FT-3000.1600"),
            S("child-custody", "Child Custody", "FT-3000.1500"),
            S("new-parent-programs", "Expecting & New Parent Programs", "PH-6100.1800"),
            S("recreation", "Recreation", "PL-7000.4360"),
        ),
    ),
    CodeEntry(
        category_id="young-adults",
        label="Young Adults",
        taxonomy_code="PS-9800",
        keywords=("youth", "young adults", "teens", "mentoring", "youth development", "gang prevention"),
        subcategories=(
            S("dropout-prevention", "Drop Out Prevention", "HH-1600.1600"),
            S("gang-prevention", "Gang Prevention", "FN-2300"),
            S("mentoring", "Child & Youth Mentoring Programs", "PH-1400.5000-100"),
            S("youth-development", "Youth Development", "PS-9800"),
        ),
    ),
    CodeEntry(
        category_id="legal-assistance",
        label="Legal Assistance",
        taxonomy_code="FT",
        keywords=("legal", "lawyer", "attorney", "court", "immigration", "civil rights", "legal aid"),
        subcategories=(
            S("general-legal-aid", "General Legal Aid", "FT-3200"),
            S("lawyers-referral", "Lawyers Referral Services", "FT-4800"),
            S("immigration-legal", "Immigration/ Naturalization Legal Services", "FT-3600"),
            S("landlord-tenant", "Landlord/Tenant Dispute", "FT-4500.4600"),
            S("restraining-orders", "Restraining Orders", "FT-6940"),
            S("identification-cards", "Identification Cards", "DF-7000.3300"),
        ),
    ),
    CodeEntry(
        category_id="utilities",
        label="Utilities",
        taxonomy_code="BV",
        keywords=("utilities", "electric", "utility assistance", "energy", "internet"),
        subcategories=(
            S("electric-payment", "Electric Service Payment Assistance", "BV-8900.9300-180"),
            S("gas-payment", "Gas Service Payment Assistance", "BV-8900.9300-250"),
            S("internet-provider", "Internet Provider", "BV-9000.3300"),
            S("utility-payment", "Utility Payment Assistance", "BV-8900.9300"),
        ),
    ),
    CodeEntry(
        category_id="transportation",
        label="Transportation",
        taxonomy_code="BT-4500",
        keywords=("transportation", "bus", "transit", "medical transport", "paratransit", "senior ride"),
        subcategories=(
            S("bus-services", "Bus Services", "BT-4500.4700"),
            S("rail-transportation", "Rail Transportation", "BT-4800.7000"),
            S("medical-transportation", "Medical Transportation", "LD-1500"),
            S("senior-ride-programs", "Senior Ride Programs", "BT-4500.6500-800"),
            S("paratransit", "General Paratransit/Community Ride Programs", "BT-4500.6500-280"),
        ),
    ),
    CodeEntry(
        category_id="hygiene-household",
        label="Hygiene & Household",
        taxonomy_code="BM-3000",
        keywords=("hygiene", "household", "grooming", "disaster supplies", "cleaning supplies"),
        subcategories=(
            S("disaster-related", "Disaster Related Clothing & Emergency Supplies", "TH-2600.1550"),
            S("grooming-supplies", "Grooming Supplies", "TI-1800.6700"),
            S("furniture", "Furniture", "BM-3000.2000"),
        ),
    ),
    KeywordEntry(
        category_id="finance-employment",
        label="Finance & Employment",
        keywords=("finance", "employment", "jobs", "vocational", "career", "credit counseling", "benefits"),
        subcategories=(
            S("job-assistance", "Job Assistance Centers", "ND-1500"),
            S("vocational-rehabilitation", "Vocational Rehabilitation", "ND-9000"),
            S("calworks", "CalWorks", "NL-1000.8500"),
            S("general-relief", "General Relief", "NL-1000.2500"),
            S("veteran-benefits", "Veteran Benefits Assistance", "FT-1000.9000"),
            S("credit-counseling", "Credit Counseling", "DM-1500.1500"),
            S("vita-programs", "VITA Programs", "DT-8800.9300"),
            S("career-fairs", "Career Fairs"),
        ),
    ),
    KeywordEntry(
        category_id="education",
        label="Education",
        keywords=("education", "school", "tutoring", "esl", "literacy", "ged", "technical training"),
        subcategories=(
            S("computer-literacy", "Computer Literacy Training Programs", "PL-7400.1500"),
            S("financial-literacy", "Financial Literacy", "NL-1000.2100"),
            S("esl", "English as a Second Language", "HL-2000.0550"),
            S("technical-schools", "Technical/Trade Schools", "HD-6000.9000"),
            S("financial-aid", "Student Financial Aid", "HL-8000"),
            S("tutoring", "Tutoring", "HL-8700"),
        ),
    ),
)

# Root segments the upstream uses across API versions, beyond the roots of
# the category codes above.
ROOT_CODE_ALIASES: Dict[str, str] = {
    "BH": "housing",
    "BD": "food",
    "L": "healthcare",
    "RR": "mental-wellness",
    "RX": "substance-use",
    "P": "children-family",
    "PH": "children-family",
    "F": "legal-assistance",
    "BV": "utilities",
    "BT": "transportation",
    "BM": "hygiene-household",
    "N": "finance-employment",
    "ND": "finance-employment",
    "NL": "finance-employment",
    "H": "education",
    "HD": "education",
    "HL": "education",
}
