"""Emoji catalog offered by the habit emoji picker."""

# Picker order; keywords are matched case-insensitively by the search box.
EMOJI_KEYWORDS: dict[str, str] = {
    "😀": "grinning face smile happy",
    "😊": "smiling face blush happy",
    "😎": "cool face sunglasses",
    "🤓": "nerd face glasses study",
    "😴": "sleeping face sleep rest",
    "🥳": "party face celebrate",
    "🤔": "thinking face think",
    "😌": "relieved face calm",
    "🧘": "meditate yoga calm mindfulness",
    "🏃": "run running jog exercise",
    "🚴": "bike cycling exercise",
    "🏊": "swim swimming exercise",
    "🏋": "weight lifting gym exercise strength",
    "🤸": "stretch gymnastics exercise",
    "🚶": "walk walking steps",
    "⚽": "soccer football sport ball",
    "🏀": "basketball sport ball",
    "🎾": "tennis sport ball",
    "💪": "muscle strong arm strength",
    "❤": "heart love health",
    "🧠": "brain mind think learn",
    "💤": "sleep zzz rest",
    "🛏": "bed sleep rest",
    "🦷": "tooth teeth floss dental",
    "🪥": "toothbrush brush teeth dental",
    "🧴": "lotion skincare skin",
    "🚿": "shower wash clean",
    "💊": "pill medicine vitamin health",
    "💧": "water drop drink hydrate",
    "🥤": "drink cup water",
    "☕": "coffee tea hot drink",
    "🍵": "tea green drink",
    "🥗": "salad healthy food eat",
    "🍎": "apple fruit healthy food",
    "🥦": "broccoli vegetable healthy food",
    "🍳": "cooking egg breakfast food",
    "🥛": "milk glass drink",
    "🚭": "no smoking quit",
    "🍺": "beer alcohol drink",
    "📚": "books read reading study",
    "📖": "book read reading",
    "✍": "write writing hand journal",
    "📝": "memo note write journal",
    "📓": "notebook journal write",
    "🎓": "graduation learn study school",
    "🗣": "speak language talk",
    "🔤": "letters language alphabet",
    "💻": "laptop computer code work",
    "⌨": "keyboard type code",
    "📧": "email mail inbox",
    "📅": "calendar plan schedule",
    "⏰": "alarm clock wake time",
    "⏳": "hourglass time focus",
    "✅": "check done task",
    "🎯": "target goal focus",
    "📈": "chart growth progress",
    "💰": "money bag save finance",
    "💵": "dollar money cash budget",
    "🏦": "bank money finance",
    "🧹": "broom clean tidy chores",
    "🧺": "laundry basket chores",
    "🍽": "dishes plate chores",
    "🪴": "plant potted garden",
    "🌱": "seedling grow plant garden",
    "🐶": "dog face pet walk",
    "🐱": "cat face pet",
    "🎸": "guitar music practice instrument",
    "🎹": "piano music practice instrument",
    "🎨": "art paint palette creative",
    "📷": "camera photo creative",
    "🎮": "game play video",
    "🧩": "puzzle game brain",
    "♟": "chess game strategy",
    "🙏": "pray gratitude thanks hands",
    "😇": "halo face angel kind",
    "🤝": "handshake friends social",
    "📞": "phone call family friends",
    "👪": "family home",
    "☀": "sun sunny morning outside",
    "🌙": "moon night evening",
    "🌳": "tree nature outside",
    "🏔": "mountain hike nature",
    "🔥": "fire streak hot",
    "⭐": "star favorite",
    "🎉": "party celebrate tada",
    "📵": "no phone screen detox",
}

COMMON_EMOJIS: list[str] = list(EMOJI_KEYWORDS)
