"""カテゴリ分類のEnum定義"""
from enum import Enum


class LocationIcon(str, Enum):
    """ランチャーのUIがグリフを選ぶためのアイコン種別"""

    AIRPORT = "airport"
    AMERICAN_FOOTBALL = "american_football"
    AMUSEMENT_PARK = "amusement_park"
    ART_GALLERY = "art_gallery"
    ASIAN_CUISINE = "asian_cuisine"
    ATM = "atm"
    BAKERY = "bakery"
    BANK = "bank"
    BAR = "bar"
    BASEBALL = "baseball"
    BASKETBALL = "basketball"
    BIKE = "bike"
    BOAT = "boat"
    BOOK_STORE = "book_store"
    BREAKFAST = "breakfast"
    BUDDHIST_TEMPLE = "buddhist_temple"
    BURGER = "burger"
    BUS = "bus"
    CABLE_CAR = "cable_car"
    CAFE = "cafe"
    CAR = "car"
    CAR_RENTAL = "car_rental"
    CAR_REPAIR = "car_repair"
    CAR_WASH = "car_wash"
    CASINO = "casino"
    CELL_PHONE_STORE = "cell_phone_store"
    CHARGING_STATION = "charging_station"
    CHURCH = "church"
    CIRCUS = "circus"
    CLINIC = "clinic"
    CLOTHING_STORE = "clothing_store"
    CONCERT_HALL = "concert_hall"
    CONVENIENCE_STORE = "convenience_store"
    COURTHOUSE = "courthouse"
    CRICKET = "cricket"
    DENTIST = "dentist"
    DISCOUNT_STORE = "discount_store"
    ELECTRIC_SCOOTER = "electric_scooter"
    FAST_FOOD = "fast_food"
    FIRE_DEPARTMENT = "fire_department"
    FITNESS_CENTER = "fitness_center"
    FLORIST = "florist"
    FOREST = "forest"
    FURNITURE_STORE = "furniture_store"
    GAS_STATION = "gas_station"
    GENERIC_TRANSIT = "generic_transit"
    GOLF = "golf"
    GOVERNMENT_BUILDING = "government_building"
    GYMNASTICS = "gymnastics"
    HAIR_SALON = "hair_salon"
    HIKING = "hiking"
    HINDU_TEMPLE = "hindu_temple"
    HOCKEY = "hockey"
    HOSPITAL = "hospital"
    HOTEL = "hotel"
    ICE_CREAM = "ice_cream"
    JAPANESE_CUISINE = "japanese_cuisine"
    KAYAKING = "kayaking"
    KEBAB = "kebab"
    KIOSK = "kiosk"
    LAUNDROMAT = "laundromat"
    LIBRARY = "library"
    LIQUOR_STORE = "liquor_store"
    MARTIAL_ARTS = "martial_arts"
    MONUMENT = "monument"
    MOPED = "moped"
    MOSQUE = "mosque"
    MOTORCYCLE = "motorcycle"
    MOTORSPORTS = "motorsports"
    MOVIE_THEATER = "movie_theater"
    MUSEUM = "museum"
    NIGHT_CLUB = "night_club"
    OPTICIAN = "optician"
    PARAGLIDING = "paragliding"
    PARK = "park"
    PARKING = "parking"
    PET_STORE = "pet_store"
    PHARMACY = "pharmacy"
    PHYSICIAN = "physician"
    PIZZA = "pizza"
    PLACE_OF_WORSHIP = "place_of_worship"
    POLICE = "police"
    POST_OFFICE = "post_office"
    PUB = "pub"
    PUBLIC_BATHROOM = "public_bathroom"
    RAMEN = "ramen"
    RESTAURANT = "restaurant"
    RUGBY = "rugby"
    SCHOOL = "school"
    SHOPPING = "shopping"
    SHOPPING_MALL = "shopping_mall"
    SKATEBOARDING = "skateboarding"
    SKIING = "skiing"
    SOCCER = "soccer"
    SOUP = "soup"
    SPORTS = "sports"
    STADIUM = "stadium"
    SUBWAY = "subway"
    SUPERMARKET = "supermarket"
    SURFING = "surfing"
    SWIMMING = "swimming"
    SYNAGOGUE = "synagogue"
    TAXI = "taxi"
    TENNIS = "tennis"
    THEATER = "theater"
    TRAIN = "train"
    TRAM = "tram"
    UNIVERSITY = "university"
    VOLLEYBALL = "volleyball"

    @classmethod
    def from_value(cls, value: str) -> "LocationIcon":
        """値からアイコンを取得"""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid location icon: {value}")
