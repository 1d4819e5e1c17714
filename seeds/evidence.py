import logging

from models.evidence import Evidence

logger = logging.getLogger(__name__)

SAMPLE_EVIDENCE = [
    {
        "type": "Physical",
        "description": "Bloody knife found at crime scene",
        "location": "Kitchen counter, 123 Main St",
        "collectedBy": "Officer Johnson",
        "tags": ["weapon", "blood", "fingerprints"],
        "weight": "0.5 kg",
        "condition": "Good",
        "storageLocation": "Evidence Room A",
        "evidenceRoom": "A-101",
        "bagsSealed": True,
        "photographed": True,
        "fingerprinted": True,
        "dnaCollected": True,
        "priority": "High",
        "notes": "Handle with extreme care - potential DNA evidence",
    },
    {
        "type": "Digital",
        "description": "Mobile phone containing text messages",
        "location": "Suspect's pocket during arrest",
        "collectedBy": "Detective Smith",
        "tags": ["phone", "digital", "messages"],
        "serialNumber": "IMEI: 123456789012345",
        "condition": "Excellent",
        "storageLocation": "Digital Evidence Lab",
        "evidenceRoom": "D-205",
        "bagsSealed": True,
        "photographed": True,
        "priority": "Medium",
        "notes": "Requires digital forensics analysis",
    },
    {
        "type": "Photo",
        "description": "Crime scene photographs",
        "location": "Entire crime scene area",
        "collectedBy": "Forensics Team",
        "tags": ["photos", "scene", "documentation"],
        "condition": "Excellent",
        "storageLocation": "Digital Archive",
        "evidenceRoom": "Digital",
        "priority": "Medium",
        "notes": "High-resolution crime scene documentation",
    },
    {
        "type": "Document",
        "description": "Threatening letter received by victim",
        "location": "Victim's mailbox",
        "collectedBy": "Officer Davis",
        "tags": ["document", "threat", "handwriting"],
        "dimensions": "8.5\" x 11\"",
        "condition": "Fair",
        "storageLocation": "Document Storage",
        "bagsSealed": True,
        "fingerprinted": True,
        "priority": "High",
        "notes": "Handwriting analysis requested",
    },
]


def seed_evidence():
    if Evidence.count():
        logger.info("Evidence data already exists, skipping seed")
        return 0
    for item in SAMPLE_EVIDENCE:
        Evidence.create(dict(item))
    logger.info("Seeded %d evidence items", len(SAMPLE_EVIDENCE))
    return len(SAMPLE_EVIDENCE)
