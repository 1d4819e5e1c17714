import logging

from models.geofiles import Geofile

logger = logging.getLogger(__name__)

SAMPLE_GEOFILES = [
    {
        "filename": "crime_hotspots_analysis.geojson",
        "filepath": "/geofiles/crime_hotspots_analysis.geojson",
        "fileType": "geojson",
        "fileSize": 28600,
        "coordinates": [-122.4094, 37.7849],
        "address": "500 Mission Street, San Francisco, CA",
        "locationName": "Mission District Analysis Zone",
        "description": "Statistical analysis of crime hotspots in the Mission District based on 6-month incident data.",
        "metadata": {"creator": "Crime Analytics Team", "incidents": 347},
        "tags": ["analysis", "crime", "hotspots", "statistics", "mission"],
        "coordinateSystem": "WGS84",
        "isPublic": True,
        "accessLevel": "public",
        "downloadCount": 12,
    },
    {
        "filename": "emergency_evacuation_routes.gpx",
        "filepath": "/geofiles/emergency_evacuation_routes.gpx",
        "fileType": "gpx",
        "fileSize": 12300,
        "coordinates": [-122.3894, 37.7594],
        "address": "1800 3rd Street, San Francisco, CA",
        "locationName": "Emergency Response Corridor",
        "description": "Evacuation routes for natural disasters and public safety threats.",
        "metadata": {"creator": "Emergency Planning Unit", "accessibility": "ada_compliant"},
        "tags": ["emergency", "evacuation", "routes", "safety"],
        "coordinateSystem": "WGS84",
        "accessLevel": "internal",
        "downloadCount": 8,
    },
    {
        "filename": "surveillance_coverage_map.shp",
        "filepath": "/geofiles/surveillance_coverage_map.shp",
        "fileType": "shp",
        "fileSize": 45200,
        "coordinates": [-122.4194, 37.7749],
        "address": "City Hall, San Francisco, CA",
        "locationName": "Civic Center Surveillance Grid",
        "description": "Camera coverage polygons for the civic center surveillance network.",
        "metadata": {"creator": "Technical Services", "cameras": 64},
        "tags": ["surveillance", "cameras", "coverage"],
        "coordinateSystem": "WGS84",
        "accessLevel": "department",
        "downloadCount": 3,
    },
]


def seed_geofiles():
    if Geofile.count():
        logger.info("Geofiles already exist, skipping seed")
        return 0
    for item in SAMPLE_GEOFILES:
        Geofile.create(dict(item))
    logger.info("Seeded %d geofiles", len(SAMPLE_GEOFILES))
    return len(SAMPLE_GEOFILES)
