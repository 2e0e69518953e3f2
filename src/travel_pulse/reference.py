"""Static reference tables: locations, channel lists and fallback guide content."""

import re

from .models import Coordinates, TravelTip

CITY_CENTERS: dict[str, Coordinates] = {
    "Tokyo": Coordinates(lat=35.6762, lng=139.6503),
    "Osaka": Coordinates(lat=34.6937, lng=135.5023),
    "Kyoto": Coordinates(lat=35.0116, lng=135.7681),
    "Sapporo": Coordinates(lat=43.0618, lng=141.3545),
    "Fukuoka": Coordinates(lat=33.5902, lng=130.4017),
    "Bangkok": Coordinates(lat=13.7563, lng=100.5018),
    "Phuket": Coordinates(lat=8.6353, lng=98.2948),
    "Chiang Mai": Coordinates(lat=18.7883, lng=98.9853),
    "Pattaya": Coordinates(lat=12.9271, lng=100.8765),
    "Krabi": Coordinates(lat=8.3192, lng=98.9264),
    "Kuala Lumpur": Coordinates(lat=3.1390, lng=101.6869),
    "Penang": Coordinates(lat=5.3520, lng=100.3330),
    "Johor Bahru": Coordinates(lat=1.4854, lng=103.7618),
    "Malacca": Coordinates(lat=2.1896, lng=102.2501),
    "Kota Kinabalu": Coordinates(lat=5.9788, lng=118.0753),
    "Manila": Coordinates(lat=14.5995, lng=120.9842),
    "Cebu": Coordinates(lat=10.3157, lng=123.8854),
    "Boracay": Coordinates(lat=11.9674, lng=121.9248),
    "Palawan": Coordinates(lat=9.8349, lng=118.7384),
    "Davao": Coordinates(lat=7.1907, lng=125.4553),
}

REGION_BY_COUNTRY: dict[str, str] = {
    "Japan": "jp",
    "Hong Kong": "hk",
    "Thailand": "th",
    "Malaysia": "my",
    "Philippines": "ph",
}
DEFAULT_REGION = "jp"

# Landmarks that always land in "Popular Destinations"
CITY_POPULAR_KEYWORDS: dict[str, dict[str, list[str]]] = {
    "Japan": {
        "Tokyo": ["tokyo tower", "tokyo skytree", "imperial palace", "ueno park", "meiji shrine", "sensō-ji", "senso-ji"],
        "Osaka": ["osaka castle", "dotonbori", "umeda sky", "shitennoji"],
        "Kyoto": ["fushimi inari", "kinkaku-ji", "ginkaku-ji", "arashiyama", "kiyomizu"],
        "Sapporo": ["odori park", "sapporo clock tower", "moerenuma"],
        "Fukuoka": ["ohori park", "dazaifu", "canal city"],
    },
    "Hong Kong": {
        "Central": ["victoria peak", "peak tram", "man mo temple", "ifc"],
        "Tsim Sha Tsui": ["avenue of stars", "harbour city", "star ferry", "k11 musea"],
        "Mong Kok": ["ladies market", "temple street", "sneakers street"],
        "Causeway Bay": ["times square", "victoria park", "sogo"],
        "Lantau Island": ["ngong ping", "tian tan buddha", "big buddha", "po lin monastery"],
    },
    "Thailand": {
        "Bangkok": ["grand palace", "wat phra kaew", "wat arun", "wat saket", "lumphini park", "chatuchak market"],
        "Phuket": ["patong beach", "big buddha", "phang nga bay", "old phuket town", "phuket town"],
        "Chiang Mai": ["wat chedi luang", "wat phra singh", "old city", "sunday night bazaar", "doi suthep"],
        "Pattaya": ["walking street", "sanctuary of truth", "jomtien beach", "bottom bar"],
        "Krabi": ["railay beach", "ao nang beach", "emerald pool", "tiger cave temple"],
    },
    "Malaysia": {
        "Kuala Lumpur": ["petronas towers", "kuala lumpur tower", "menara kl", "bukit bintang", "chinatown kl"],
        "Penang": ["penang hill", "george town", "kek lok si temple", "cheong fatt tze mansion"],
        "Johor Bahru": ["legoland", "istana bukit serene", "nusajaya", "desaru beach"],
        "Malacca": ["malacca city center", "jonker street", "menara taming sari", "christ church"],
        "Kota Kinabalu": ["mount kinabalu", "sabah museum", "kota kinabalu waterfront", "tunku abdul rahman park"],
    },
}

# Country/city mentions that make a story relevant to the selected country
COUNTRY_KEYWORDS: dict[str, list[str]] = {
    "Japan": ["japan", "tokyo", "osaka", "kyoto", "sapporo", "hiroshima"],
    "Hong Kong": ["hong kong", "hk"],
    "Thailand": ["thailand", "bangkok", "phuket", "chiang mai", "pattaya", "krabi"],
    "Malaysia": ["malaysia", "kuala lumpur", "kl", "penang", "johor bahru", "malacca"],
}

GENERIC_SUBREDDITS = ["travel", "solotravel", "travelhacks", "traveladvice"]

STORY_SUBREDDITS: dict[str, list[str]] = {
    "Japan": ["JapanTravel", "JapanTravelTips", "solotravel", "travelhacks", "travel"],
    "Hong Kong": ["HongKong", "solotravel", "travelhacks", "travel"],
    "Thailand": ["Thailand", "ThailandTourism", "solotravel", "travelhacks", "travel"],
    "Malaysia": ["Malaysia", "MalaysiaTravel", "solotravel", "travelhacks", "travel"],
}
DEFAULT_STORY_SUBREDDITS = ["travel", "solotravel", "travelhacks"]

# Country channels polled for the trending feed
TRENDING_SUBREDDITS: dict[str, list[str]] = {
    "Japan": ["JapanTravel", "JapanTravelTips"],
    "Hong Kong": ["HongKong"],
    "Thailand": ["Thailand", "ThailandTourism"],
    "Malaysia": ["Malaysia", "MalaysiaTravel"],
}

# Search terms used when querying a single channel for a city
CITY_SEARCH_KEYWORDS: dict[str, dict[str, list[str]]] = {
    "Japan": {
        "Tokyo": ["tokyo", "shibuya", "shinjuku", "asakusa"],
        "Osaka": ["osaka", "dotonbori", "umeda"],
        "Kyoto": ["kyoto", "arashiyama", "fushimi"],
        "Sapporo": ["sapporo", "hokkaido"],
        "Hiroshima": ["hiroshima"],
    },
    "Hong Kong": {
        "Victoria Peak": ["victoria peak", "hong kong"],
        "Central": ["central", "hong kong"],
        "Mong Kok": ["mong kok", "hong kong"],
        "Tsim Sha Tsui": ["tsim sha tsui", "hong kong"],
        "Stanley": ["stanley", "hong kong"],
    },
    "Thailand": {
        "Bangkok": ["bangkok", "sukhumvit", "silom"],
        "Phuket": ["phuket", "patong"],
        "Chiang Mai": ["chiang mai", "old city"],
        "Pattaya": ["pattaya"],
        "Krabi": ["krabi", "phi phi"],
    },
    "Malaysia": {
        "Kuala Lumpur": ["kuala lumpur", "kl", "petronas"],
        "Penang": ["penang", "georgetown"],
        "Johor Bahru": ["johor bahru", "jb"],
        "Malacca": ["malacca", "melaka"],
    },
}

# Address matchers used to keep restaurant results inside the selected place
COUNTRY_ADDRESS_PATTERNS: dict[str, list[re.Pattern]] = {
    "Japan": [re.compile(r"\bJapan\b", re.I), re.compile("日本")],
    "Thailand": [re.compile(r"\bThailand\b", re.I)],
    "Malaysia": [re.compile(r"\bMalaysia\b", re.I)],
    "Hong Kong": [re.compile(r"\bHong Kong\b", re.I)],
    "Philippines": [re.compile(r"\bPhilippines\b", re.I)],
}
CITY_ADDRESS_PATTERNS: dict[str, list[re.Pattern]] = {
    "Tokyo": [re.compile(r"\bTokyo\b", re.I), re.compile("東京都")],
    "Osaka": [re.compile(r"\bOsaka\b", re.I), re.compile("大阪")],
    "Kyoto": [re.compile(r"\bKyoto\b", re.I), re.compile("京都")],
    "Sapporo": [re.compile(r"\bSapporo\b", re.I), re.compile("札幌")],
    "Fukuoka": [re.compile(r"\bFukuoka\b", re.I), re.compile("福岡")],
}

CHECKLIST_URL_TEMPLATES = [
    "https://www.japan-guide.com/e/e{city}.html",
    "https://www.japan-guide.com/",
]


def city_center(city: str) -> Coordinates | None:
    return CITY_CENTERS.get(city)


def region_for(country: str) -> str:
    return REGION_BY_COUNTRY.get(country, DEFAULT_REGION)


def popular_keywords_for(city: str, country: str) -> list[str]:
    return CITY_POPULAR_KEYWORDS.get(country, {}).get(city, [])


def story_subreddits_for(country: str) -> list[str]:
    return STORY_SUBREDDITS.get(country, DEFAULT_STORY_SUBREDDITS)


def trending_subreddits_for(city: str, country: str) -> list[str]:
    """Country channels plus the city's own channel, without duplicates."""
    subreddits: list[str] = []
    for name in TRENDING_SUBREDDITS.get(country, []) + [city.replace(" ", "")]:
        if name and name.lower() not in {s.lower() for s in subreddits}:
            subreddits.append(name)
    return subreddits


def city_search_keywords(country: str, city: str) -> list[str]:
    return CITY_SEARCH_KEYWORDS.get(country, {}).get(city, [city.lower()])


# --- Static fallback guide content ---


def _static(items: list[tuple[str, str]]) -> list[TravelTip]:
    return [TravelTip(text=text, category=category, source="static") for text, category in items]


STATIC_TIPS: dict[str, list[TravelTip]] = {
    "Tokyo": _static([
        ("Get a Suica/Pasmo card for seamless transit - works nationwide", "transport"),
        ("Visit early morning (6-8 AM) to beat crowds at Senso-ji Temple", "itinerary"),
        ("Buy from konbini (convenience stores) - high quality products at 24/7 locations", "food"),
        ("Visit teamLab Borderless for immersive digital art experience", "itinerary"),
        ("Enjoy karaoke culture - a must-do experience, cheap and fun", "general"),
        ("Do not tip aggressively - tipping is not expected and may be insulting", "mistakes"),
        ("Avoid eating while walking - considered rude in public spaces", "mistakes"),
        ("Last trains run 11 PM-12 AM; plan evening transit accordingly", "transport"),
        ("Rush hours (7-9 AM, 5-7 PM) mean extremely crowded trains", "transport"),
    ]),
    "Osaka": _static([
        ("Dotonbori is food paradise - try takoyaki, okonomiyaki, and kushikatsu", "food"),
        ("Use Osaka Amazing Pass for unlimited train rides + attraction discounts", "budget"),
        ("Visit at night when neon lights and food stalls come alive", "itinerary"),
        ("Avoid assuming all shops accept credit cards - many are cash only", "mistakes"),
        ("Explore Kuromon Market for fresh seafood and produce", "food"),
        ("Book Universal Studios Japan tickets in advance for better pricing", "budget"),
    ]),
    "Kyoto": _static([
        ("Arrive early (7-8 AM) to avoid crowds at famous temples", "itinerary"),
        ("Rent a bicycle for best way to explore - cheap and flexible", "transport"),
        ("Visit Fushimi Inari at dawn for thousands of red torii gates mostly alone", "itinerary"),
        ("Try Kyoto vegetarian Buddhist cuisine (shojin ryori) for unique experience", "food"),
        ("Book ryokan accommodation 2+ months in advance, especially in spring", "budget"),
    ]),
    "Sapporo": _static([
        ("Sapporo Ramen alley has 17 small ramen shops - try multiple for comparison", "food"),
        ("Visit Sapporo Snow Festival (early Feb) for unique winter experience", "itinerary"),
        ("Avoid underestimating cold weather - winter can be -5 to -10°C", "mistakes"),
        ("Book Snow Festival accommodations months ahead - gets fully booked", "budget"),
    ]),
    "Fukuoka": _static([
        ("Yatai (street food stalls) are the soul of Fukuoka - go at night", "food"),
        ("Take day trip to Dazaifu for Tenjin Shrine (30 min by train)", "itinerary"),
        ("Cash required for yatai stalls - they don't accept credit cards", "budget"),
        ("Sugoca IC card works across Fukuoka buses/trains", "transport"),
    ]),
}

STATIC_GUIDES: dict[str, dict[str, list[str]]] = {
    "Tokyo": {
        "checklist": [
            "Passport (must be valid for 6+ months)",
            "Mix of Yen cash and credit cards",
            "Suica/Pasmo IC card for transit",
            "Pocket WiFi rental or local SIM card",
            "Comfortable walking shoes",
            "Japan Rail Pass (if visiting multiple cities)",
            "Travel insurance",
            "Portable phone charger",
        ],
        "transportation": [
            "JR Yamanote Loop connects major areas of Tokyo",
            "Tokyo Metro has 13 lines - English signage helpful",
            "Taxis are expensive; prefer trains and buses",
            "IC card (Suica/Pasmo) simplifies all transit",
        ],
        "best_time": [
            "Spring (Mar-May): Cherry blossoms, mild weather",
            "Fall (Sep-Nov): Comfortable temps, clear skies",
            "Avoid: Winter (crowded), Summer (hot/humid)",
        ],
    },
    "Osaka": {
        "checklist": ["Comfortable walking shoes for food tours", "Cash for street food and small vendors", "Osaka Amazing Pass", "Transit card (ICOCA)"],
        "transportation": ["Shinkansen: 2.5-3 hours from Tokyo", "Osaka subway is easy with English signage"],
        "best_time": ["Spring (Apr-May): Cherry blossoms", "Fall (Oct-Nov): Perfect temperatures"],
    },
    "Kyoto": {
        "checklist": ["Respectful clothing for temples", "Cash for temple entry fees", "Comfortable walking shoes"],
        "transportation": ["Bicycle rental perfect for city", "Buses cover most attractions"],
        "best_time": ["Spring (late Mar-Apr): Cherry blossoms", "Fall (Oct-Nov): Autumn leaves"],
    },
    "Sapporo": {
        "checklist": ["Heavy winter clothing", "Insulated snow boots", "Thermal underwear"],
        "transportation": ["Sapporo Subway (3 lines) primary transit", "SAPICA card works region-wide"],
        "best_time": ["Winter (Dec-Feb): Snow Festival", "Summer (Jul-Aug): Perfect weather"],
    },
    "Fukuoka": {
        "checklist": ["Cash for food stalls", "Transit card (Sugoca)", "Comfortable shoes for exploring"],
        "transportation": ["Fukuoka Airport close to city center", "Sugoca card works on buses/trains"],
        "best_time": ["Fall (Sep-Nov): Clear weather", "Spring (Mar-May): Cherry blossoms"],
    },
}
DEFAULT_GUIDE_CITY = "Tokyo"

COMMON_MISTAKES = [
    "Don't rely only on credit cards; many small restaurants and shops are cash-only",
    "Don't miss the last train (~midnight); taxis are extremely expensive late at night",
    "Don't assume restaurants stay open late; many close early outside major areas",
    "Don't overpack your itinerary; rushing between places reduces your actual experience",
    "Don't bring large luggage on trains; it's difficult to navigate stations and crowds",
    "Don't expect public trash bins; carry a small bag for your trash",
    "Don't wait too long to book hotels; prices increase and options disappear quickly",
    "Don't wear uncomfortable clothes; you will walk A LOT every day",
]


def static_tips_for(city: str) -> list[TravelTip]:
    return STATIC_TIPS.get(city) or STATIC_TIPS[DEFAULT_GUIDE_CITY]


def static_guide_for(city: str) -> dict[str, list[str]]:
    return STATIC_GUIDES.get(city) or STATIC_GUIDES[DEFAULT_GUIDE_CITY]
