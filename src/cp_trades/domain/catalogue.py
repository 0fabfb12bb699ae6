"""Construction trade catalogue and per-trade insurance minimums.

Trade names are the display strings stored in ``contractors.trades``.
"""

from dataclasses import dataclass

TRADES: dict[str, str] = {
    # General construction
    "GENERAL_CONTRACTOR": "General Contractor",
    "CONSTRUCTION_MANAGER": "Construction Manager",
    "PROJECT_MANAGER": "Project Manager",
    # Site work and earthwork
    "SITE_WORK": "Site Work",
    "EXCAVATION": "Excavation & Grading",
    "DEMOLITION": "Demolition",
    "LAND_CLEARING": "Land Clearing",
    "EARTHWORK": "Earthwork",
    "PILE_DRIVING": "Pile Driving",
    "CAISSON_DRILLING": "Caisson Drilling",
    "BLASTING": "Blasting",
    "DEWATERING": "Dewatering",
    "SHORING": "Shoring & Underpinning",
    # Concrete and masonry
    "CONCRETE_FORMING": "Concrete Forming",
    "CONCRETE_PLACEMENT": "Concrete Placement & Finishing",
    "CONCRETE_PUMPING": "Concrete Pumping",
    "PRECAST_CONCRETE": "Precast Concrete",
    "POST_TENSIONING": "Post-Tensioning",
    "MASONRY": "Masonry",
    "BRICK_LAYING": "Brick Laying",
    "STONE_WORK": "Stone Work",
    "TILE_SETTING": "Tile & Stone Setting",
    "TERRAZZO": "Terrazzo",
    # Structural
    "STRUCTURAL_STEEL": "Structural Steel Erection",
    "STEEL_FABRICATION": "Steel Fabrication",
    "REINFORCING_STEEL": "Reinforcing Steel (Rebar)",
    "METAL_DECKING": "Metal Decking",
    "ORNAMENTAL_METALS": "Ornamental Metals & Railings",
    "MISCELLANEOUS_METALS": "Miscellaneous Metals",
    # Exterior envelope
    "WATERPROOFING": "Waterproofing",
    "DAMPPROOFING": "Dampproofing",
    "CAULKING": "Caulking & Sealants",
    "ROOFING": "Roofing",
    "ROOFING_MEMBRANE": "Roofing Membrane",
    "ROOFING_METAL": "Metal Roofing",
    "ROOFING_SHINGLE": "Shingle Roofing",
    "SIDING": "Siding",
    "EXTERIOR_INSULATION": "Exterior Insulation & Finish Systems (EIFS)",
    "BUILDING_ENVELOPE": "Building Envelope Consultant",
    # Windows, doors and glass
    "WINDOW_INSTALLATION": "Window Installation",
    "CURTAIN_WALL": "Curtain Wall",
    "STOREFRONT": "Storefront Systems",
    "GLAZING": "Glazing",
    "DOOR_INSTALLATION": "Door Installation",
    "OVERHEAD_DOORS": "Overhead Doors & Loading Docks",
    "AUTOMATIC_DOORS": "Automatic Door Systems",
    "HARDWARE": "Door Hardware & Access Control",
    # Interior finishes
    "DRYWALL": "Drywall & Gypsum Board",
    "PLASTERING": "Plastering & Stucco",
    "PAINTING": "Painting & Coating",
    "WALLCOVERING": "Wallcovering",
    "FLOORING": "Flooring",
    "CARPET_INSTALLATION": "Carpet Installation",
    "HARDWOOD_FLOORING": "Hardwood Flooring",
    "RESILIENT_FLOORING": "Resilient Flooring (Vinyl, Rubber)",
    "EPOXY_FLOORING": "Epoxy & Resinous Flooring",
    "POLISHED_CONCRETE": "Polished Concrete",
    "CERAMIC_TILE": "Ceramic Tile Installation",
    "ACOUSTICAL_CEILINGS": "Acoustical Ceilings",
    "SUSPENDED_CEILINGS": "Suspended Ceiling Systems",
    "SPECIALTY_CEILINGS": "Specialty Ceilings",
    # Carpentry and millwork
    "ROUGH_CARPENTRY": "Rough Carpentry",
    "FINISH_CARPENTRY": "Finish Carpentry",
    "ARCHITECTURAL_MILLWORK": "Architectural Millwork",
    "CASEWORK": "Casework & Cabinetry",
    "CUSTOM_WOODWORK": "Custom Woodwork",
    "WOOD_FRAMING": "Wood Framing",
    "MASS_TIMBER": "Mass Timber Construction",
    # Specialties
    "SIGNAGE": "Signage",
    "LOCKERS": "Lockers & Shelving",
    "PARTITIONS": "Toilet & Shower Partitions",
    "WALL_PROTECTION": "Wall Protection Systems",
    "CORNER_GUARDS": "Corner Guards & Bumpers",
    "LOUVERS": "Louvers & Vents",
    "FLAGPOLES": "Flagpoles",
    "IDENTIFYING_DEVICES": "Identifying Devices",
    "PEDESTRIAN_CONTROL": "Pedestrian Control Devices",
    # Equipment
    "COMMERCIAL_EQUIPMENT": "Commercial Equipment",
    "KITCHEN_EQUIPMENT": "Kitchen Equipment",
    "LABORATORY_EQUIPMENT": "Laboratory Equipment",
    "HEALTHCARE_EQUIPMENT": "Healthcare Equipment",
    "LAUNDRY_EQUIPMENT": "Laundry Equipment",
    "PARKING_EQUIPMENT": "Parking Control Equipment",
    "LOADING_DOCK_EQUIPMENT": "Loading Dock Equipment",
    "WASTE_HANDLING": "Waste Handling Equipment",
    # Furnishings
    "FURNITURE": "Furniture & Fixtures",
    "WINDOW_TREATMENTS": "Window Treatments",
    "ARTWORK": "Artwork & Accessories",
    "INTERIOR_PLANTS": "Interior Plants & Planters",
    # Fire protection
    "FIRE_SUPPRESSION": "Fire Suppression Systems",
    "FIRE_SPRINKLERS": "Fire Sprinkler Systems",
    "FIRE_ALARM": "Fire Alarm Systems",
    "FIRE_EXTINGUISHERS": "Fire Extinguishers",
    "FIRE_STOPPING": "Fire Stopping & Smoke Sealing",
    "KITCHEN_FIRE_SUPPRESSION": "Kitchen Fire Suppression",
    # Plumbing
    "PLUMBING": "Plumbing",
    "PLUMBING_FIXTURES": "Plumbing Fixtures",
    "PIPE_INSULATION": "Pipe Insulation",
    "WATER_TREATMENT": "Water Treatment Systems",
    "FUEL_SYSTEMS": "Fuel Systems",
    "NATURAL_GAS": "Natural Gas Piping",
    "MEDICAL_GAS": "Medical Gas Systems",
    "PROCESS_PIPING": "Process Piping",
    "BACKFLOW_PREVENTION": "Backflow Prevention",
    # HVAC
    "HVAC": "HVAC",
    "MECHANICAL": "Mechanical Systems",
    "SHEET_METAL": "Sheet Metal",
    "DUCTWORK": "Ductwork & Duct Insulation",
    "AIR_CONDITIONING": "Air Conditioning",
    "HEATING": "Heating Systems",
    "VENTILATION": "Ventilation Systems",
    "REFRIGERATION": "Refrigeration",
    "BOILERS": "Boilers",
    "CHILLERS": "Chillers",
    "COOLING_TOWERS": "Cooling Towers",
    "AIR_HANDLING": "Air Handling Units",
    "HVAC_CONTROLS": "HVAC Control Systems",
    "ENERGY_RECOVERY": "Energy Recovery Systems",
    # Electrical
    "ELECTRICAL": "Electrical",
    "ELECTRICAL_POWER": "Electrical Power Distribution",
    "LIGHTING": "Lighting & Lighting Controls",
    "EMERGENCY_POWER": "Emergency Power Systems",
    "GENERATORS": "Generator Installation",
    "UPS_SYSTEMS": "UPS & Power Conditioning",
    "SOLAR_PANELS": "Solar Panel Installation",
    "ELECTRICAL_TESTING": "Electrical Testing & Commissioning",
    "GROUNDING": "Grounding & Lightning Protection",
    "CABLE_TRAY": "Cable Tray & Conduit",
    # Low voltage and communications
    "FIRE_ALARM_LOW_VOLTAGE": "Fire Alarm (Low Voltage)",
    "SECURITY_SYSTEMS": "Security & Access Control Systems",
    "CCTV": "CCTV & Surveillance",
    "AUDIO_VISUAL": "Audio Visual Systems",
    "TELECOMMUNICATIONS": "Telecommunications",
    "DATA_CABLING": "Data & Voice Cabling",
    "STRUCTURED_CABLING": "Structured Cabling Systems",
    "NURSE_CALL": "Nurse Call Systems",
    "SOUND_SYSTEMS": "Sound & Public Address Systems",
    "BUILDING_AUTOMATION": "Building Automation Systems (BAS)",
    "INTERCOM": "Intercom Systems",
    "CLOCK_SYSTEMS": "Clock & Program Systems",
    # Conveying systems
    "ELEVATORS": "Elevators",
    "ESCALATORS": "Escalators",
    "MOVING_WALKS": "Moving Walks",
    "LIFTS": "Wheelchair Lifts & Platform Lifts",
    "MATERIAL_HANDLING": "Material Handling Systems",
    "CONVEYORS": "Conveyors",
    "HOISTS": "Hoists & Cranes",
    "DUMBWAITERS": "Dumbwaiters",
    # Site improvements
    "LANDSCAPING": "Landscaping",
    "IRRIGATION": "Irrigation Systems",
    "SITE_UTILITIES": "Site Utilities",
    "PAVING": "Paving & Surfacing",
    "ASPHALT": "Asphalt Paving",
    "CONCRETE_PAVING": "Concrete Paving",
    "STRIPING": "Pavement Marking & Striping",
    "FENCING": "Fencing & Gates",
    "RETAINING_WALLS": "Retaining Walls",
    "SITE_LIGHTING": "Site Lighting",
    "SITE_FURNISHINGS": "Site Furnishings",
    "PLAYGROUND_EQUIPMENT": "Playground Equipment",
    "ATHLETIC_FIELDS": "Athletic Fields & Courts",
    # Utilities
    "WATER_DISTRIBUTION": "Water Distribution",
    "SANITARY_SEWER": "Sanitary Sewer",
    "STORM_DRAINAGE": "Storm Drainage",
    "ELECTRICAL_UTILITIES": "Electrical Utilities",
    "GAS_UTILITIES": "Gas Distribution Utilities",
    "TELECOMMUNICATIONS_UTILITIES": "Telecommunications Utilities",
    # Environmental and remediation
    "ASBESTOS_ABATEMENT": "Asbestos Abatement",
    "LEAD_ABATEMENT": "Lead Paint Abatement",
    "MOLD_REMEDIATION": "Mold Remediation",
    "HAZMAT": "Hazardous Materials Removal",
    "ENVIRONMENTAL_REMEDIATION": "Environmental Remediation",
    "RADON_MITIGATION": "Radon Mitigation",
    # Specialized systems
    "CLEAN_ROOM": "Clean Room Construction",
    "INDUSTRIAL_PROCESS": "Industrial Process Systems",
    "FOOD_SERVICE": "Food Service Systems",
    "POOLS": "Pool & Spa Systems",
    "FOUNTAINS": "Fountains & Water Features",
    "AQUARIUMS": "Aquariums",
    "THEATERS": "Theater & Stage Equipment",
    "SHOOTING_RANGES": "Shooting Range Systems",
    "BOWLING_ALLEYS": "Bowling Alley Equipment",
    # Testing and inspection
    "TESTING": "Testing & Inspection",
    "BALANCING": "Testing, Adjusting & Balancing (TAB)",
    "COMMISSIONING": "Building Commissioning",
    "SPECIAL_INSPECTION": "Special Inspection",
    "GEOTECHNICAL": "Geotechnical Engineering",
    "STRUCTURAL_OBSERVATION": "Structural Observation",
    # Restoration and preservation
    "HISTORIC_RESTORATION": "Historic Restoration",
    "BUILDING_RESTORATION": "Building Restoration",
    "FACADE_RESTORATION": "Facade Restoration & Cleaning",
    "MASONRY_RESTORATION": "Masonry Restoration",
    # Temporary facilities
    "TEMPORARY_FACILITIES": "Temporary Facilities",
    "SCAFFOLDING": "Scaffolding",
    "TEMPORARY_POWER": "Temporary Power & Lighting",
    "TEMPORARY_PROTECTION": "Temporary Protection",
    "BARRICADES": "Barricades & Enclosures",
    "TEMPORARY_HVAC": "Temporary HVAC",
    # Rigging and hoisting
    "RIGGING": "Rigging",
    "CRANE_SERVICES": "Crane Services",
    "HEAVY_HAULING": "Heavy Hauling",
    # Other specialties
    "SURVEYING": "Surveying",
    "LAYOUT": "Construction Layout",
    "CUTTING_CORING": "Concrete Cutting & Coring",
    "BUILDING_WRAP": "Building Wrap & Housewrap",
    "INSULATION": "Insulation (Thermal & Acoustical)",
    "JOINT_SEALANTS": "Joint Sealants",
    "EXPANSION_JOINTS": "Expansion Joint Systems",
    "ACCESS_FLOORING": "Access Flooring",
    "PARKING_STRUCTURES": "Parking Structure Restoration",
    "BRIDGE_WORK": "Bridge Construction & Repair",
    "TUNNEL_WORK": "Tunnel Construction",
    "MARINE_WORK": "Marine Construction",
    "UNDERWATER_CONSTRUCTION": "Underwater Construction",
    "INDUSTRIAL_COATINGS": "Industrial Coatings & Linings",
    "PROTECTIVE_COATINGS": "Protective Coatings",
    "FIREPROOFING": "Fireproofing",
    "RADIATION_PROTECTION": "Radiation Protection",
    "SOUND_ISOLATION": "Sound Isolation & Vibration Control",
    "AUDIO_ACOUSTICS": "Audio Acoustics",
    # Renewable energy
    "SOLAR_PHOTOVOLTAIC": "Solar Photovoltaic Systems",
    "WIND_TURBINES": "Wind Turbines",
    "GEOTHERMAL": "Geothermal Systems",
    # Technology and smart building
    "BUILDING_INFORMATION_MODELING": "Building Information Modeling (BIM)",
    "SMART_BUILDING": "Smart Building Systems",
    "IOT_SYSTEMS": "IoT Building Systems",
    "ENERGY_MANAGEMENT": "Energy Management Systems",
    # Maintenance and operations
    "FACILITY_MAINTENANCE": "Facility Maintenance",
    "JANITORIAL": "Janitorial Services",
    "PEST_CONTROL": "Pest Control",
    "SNOW_REMOVAL": "Snow Removal",
    # Miscellaneous
    "GENERAL_TRADES": "General Trades",
    "SPECIALTY_CONTRACTOR": "Specialty Contractor",
    "VENDOR": "Vendor/Supplier",
    "CONSULTANT": "Consultant",
    "ARCHITECT": "Architect",
    "ENGINEER": "Engineer",
    "LANDSCAPE_ARCHITECT": "Landscape Architect",
}

ALL_TRADES: tuple[str, ...] = tuple(sorted(TRADES.values()))

# Curated subset for pickers; most trades belong to no category.
TRADE_CATEGORIES: dict[str, tuple[str, ...]] = {
    "General Construction": tuple(
        TRADES[k] for k in ("GENERAL_CONTRACTOR", "CONSTRUCTION_MANAGER", "PROJECT_MANAGER")
    ),
    "Site Work & Earthwork": tuple(
        TRADES[k]
        for k in (
            "SITE_WORK",
            "EXCAVATION",
            "DEMOLITION",
            "LAND_CLEARING",
            "EARTHWORK",
            "PILE_DRIVING",
            "CAISSON_DRILLING",
            "BLASTING",
            "DEWATERING",
            "SHORING",
        )
    ),
    "Concrete & Masonry": tuple(
        TRADES[k]
        for k in (
            "CONCRETE_FORMING",
            "CONCRETE_PLACEMENT",
            "CONCRETE_PUMPING",
            "PRECAST_CONCRETE",
            "POST_TENSIONING",
            "MASONRY",
            "BRICK_LAYING",
            "STONE_WORK",
            "TILE_SETTING",
            "TERRAZZO",
        )
    ),
    "Structural": tuple(
        TRADES[k]
        for k in (
            "STRUCTURAL_STEEL",
            "STEEL_FABRICATION",
            "REINFORCING_STEEL",
            "METAL_DECKING",
            "ORNAMENTAL_METALS",
            "MISCELLANEOUS_METALS",
        )
    ),
    "MEP (Mechanical, Electrical, Plumbing)": tuple(
        TRADES[k] for k in ("PLUMBING", "HVAC", "ELECTRICAL", "FIRE_SUPPRESSION", "FIRE_ALARM")
    ),
    "Finishes": tuple(
        TRADES[k]
        for k in (
            "DRYWALL",
            "PAINTING",
            "FLOORING",
            "CERAMIC_TILE",
            "ACOUSTICAL_CEILINGS",
            "FINISH_CARPENTRY",
        )
    ),
    "Specialties & Equipment": tuple(
        TRADES[k]
        for k in ("ELEVATORS", "SECURITY_SYSTEMS", "AUDIO_VISUAL", "KITCHEN_EQUIPMENT", "SIGNAGE")
    ),
}


@dataclass(frozen=True)
class InsuranceMinimums:
    """Minimum limits in whole dollars."""

    gl_minimum: int
    wc_minimum: int
    auto_minimum: int
    umbrella_minimum: int


DEFAULT_MINIMUMS = InsuranceMinimums(
    gl_minimum=1_000_000,
    wc_minimum=1_000_000,
    auto_minimum=1_000_000,
    umbrella_minimum=2_000_000,
)

_HIGH_RISK = InsuranceMinimums(
    gl_minimum=2_000_000,
    wc_minimum=1_000_000,
    auto_minimum=1_000_000,
    umbrella_minimum=2_000_000,
)

TRADE_MINIMUMS: dict[str, InsuranceMinimums] = {
    TRADES["GENERAL_CONTRACTOR"]: InsuranceMinimums(
        gl_minimum=2_000_000,
        wc_minimum=1_000_000,
        auto_minimum=1_000_000,
        umbrella_minimum=5_000_000,
    ),
    TRADES["ROOFING"]: _HIGH_RISK,
    TRADES["ELECTRICAL"]: _HIGH_RISK,
    TRADES["PLUMBING"]: _HIGH_RISK,
    TRADES["HVAC"]: _HIGH_RISK,
}


def search_trades(query: str) -> list[str]:
    """Case-insensitive substring match over ALL_TRADES, alphabetical."""
    needle = query.strip().lower()
    return [t for t in ALL_TRADES if needle in t.lower()]


def is_valid_trade(trade: str) -> bool:
    return trade in TRADES.values()


def category_of(trade: str) -> str | None:
    for category, trades in TRADE_CATEGORIES.items():
        if trade in trades:
            return category
    return None


def minimums_for(trade: str) -> InsuranceMinimums:
    return TRADE_MINIMUMS.get(trade, DEFAULT_MINIMUMS)
