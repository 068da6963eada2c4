"""Bundled English word list used when no word file or API is configured."""

from __future__ import annotations

from typing import Dict, Tuple

DEFAULT_WORDS: Dict[int, Tuple[str, ...]] = {
    4: (
        "ABLE", "ACID", "AREA", "ARMY", "AUNT", "BABY", "BACK", "BAKE", "BALL", "BAND",
        "BANK", "BARN", "BEAR", "BELT", "BIRD", "BLUE", "BOAT", "BODY", "BONE", "BOOK",
        "CAKE", "CALM", "CAMP", "CARD", "CART", "CASH", "CAVE", "CHIP", "CITY", "CLAY",
        "COAT", "CODE", "COIN", "COLD", "CORN", "CRAB", "DARK", "DATE", "DEER", "DESK",
        "DIME", "DISH", "DOOR", "DOVE", "DUCK", "DUST", "EASY", "ECHO", "EDGE", "EVER",
        "FACE", "FACT", "FARM", "FERN", "FISH", "FLAG", "FOAM", "FORK", "FROG", "GATE",
        "GIFT", "GLOW", "GOAT", "GOLD", "GRIP", "HAIR", "HAND", "HARP", "HILL", "HOME",
        "HOPE", "HORN", "IDEA", "IRON", "JAZZ", "JUMP", "KEEP", "KING", "KITE", "KNOT",
        "LAKE", "LAMP", "LEAF", "LIME", "LION", "LOAF", "MAZE", "MILK", "MINT", "MOON",
        "NEST", "NOTE", "OVEN", "PARK", "PEAR", "POND", "QUIZ", "RAIN", "ROAD", "ROPE",
        "SAND", "SHIP", "SNOW", "SOUP", "STAR", "TALE", "TENT", "TIDE", "TRAP", "TREE",
        "VASE", "VOTE", "WAVE", "WOLF", "WORD", "YARD", "YEAR", "ZERO", "ZONE", "OXEN",
    ),
    5: (
        "ACORN", "ADULT", "ALARM", "ALBUM", "ANGEL", "APPLE", "ARROW", "BACON", "BEACH", "BERRY",
        "BLADE", "BLOOM", "BOARD", "BRAIN", "BREAD", "BRICK", "BRUSH", "CABIN", "CAMEL", "CANDY",
        "CHAIR", "CHALK", "CHESS", "CLOCK", "CLOUD", "COAST", "CORAL", "CRANE", "CREEK", "CROWN",
        "DAISY", "DANCE", "DREAM", "DRIFT", "EAGLE", "EARTH", "ELBOW", "EMBER", "FABLE", "FAIRY",
        "FEAST", "FIELD", "FLAME", "FLUTE", "FROST", "FRUIT", "GHOST", "GIANT", "GLOBE", "GRAPE",
        "GRASS", "HEART", "HONEY", "HORSE", "HOTEL", "IVORY", "JELLY", "JEWEL", "JUICE", "KNIFE",
        "LEMON", "LIGHT", "LUNAR", "MANGO", "MAPLE", "MARCH", "MEDAL", "MONEY", "MOUSE", "MUSIC",
        "NIGHT", "NOBLE", "OCEAN", "OLIVE", "ORBIT", "OTTER", "PAINT", "PEARL", "PIANO", "PLANT",
        "QUEEN", "QUEST", "QUIET", "RADIO", "RAVEN", "RIVER", "ROBIN", "SALAD", "SCALE", "SHEEP",
        "SHELL", "SMILE", "SPACE", "SQUID", "STONE", "STORM", "SUGAR", "TABLE", "TIGER", "TOAST",
        "TOWER", "TRAIN", "TULIP", "UNCLE", "VALVE", "VAPOR", "VIVID", "WAGON", "WATER", "WHALE",
        "WHEAT", "YACHT", "YOUTH", "ZEBRA", "OXIDE", "PIXEL", "WALTZ", "BOXER", "JOKER", "KAYAK",
    ),
    6: (
        "ANCHOR", "ANIMAL", "ARCADE", "AUTUMN", "BASKET", "BEETLE", "BRIDGE", "BUCKET", "BUTTER", "CACTUS",
        "CAMERA", "CANDLE", "CANVAS", "CARPET", "CASTLE", "CHERRY", "CIRCLE", "CLOSET", "COFFEE", "COOKIE",
        "CREATE", "DESERT", "DINNER", "DRAGON", "EMPIRE", "ENGINE", "FABRIC", "FALCON", "FINGER", "FLOWER",
        "FOREST", "FROZEN", "GALAXY", "GARDEN", "GINGER", "GUITAR", "HAMMER", "HARBOR", "HELMET", "HOCKEY",
        "INSECT", "ISLAND", "JACKET", "JIGSAW", "JUNGLE", "KETTLE", "KITTEN", "LADDER", "LAPTOP", "LIZARD",
        "LOCKET", "MARBLE", "MEADOW", "MIRROR", "MONKEY", "NAPKIN", "NEEDLE", "NUTMEG", "ORANGE", "OYSTER",
        "PALACE", "PARROT", "PEANUT", "PENCIL", "PEPPER", "PICNIC", "PILLOW", "PLANET", "POCKET", "PUZZLE",
        "QUARTZ", "QUIVER", "RABBIT", "RACKET", "RIBBON", "ROCKET", "SADDLE", "SALMON", "SCHOOL", "SHADOW",
        "SILVER", "SPIDER", "SPRING", "SQUASH", "STREAM", "SUMMER", "SUNSET", "TEMPLE", "TICKET", "TOMATO",
        "TURTLE", "UMPIRE", "VELVET", "VIOLIN", "WALNUT", "WINDOW", "WINTER", "WIZARD", "YELLOW", "ZIPPER",
        "OXYGEN", "VOYAGE", "BREEZE", "FIZZLE", "JOCKEY", "KNIGHT", "WAFFLE", "YOGURT", "ZENITH", "BAMBOO",
    ),
}


__all__ = ["DEFAULT_WORDS"]
