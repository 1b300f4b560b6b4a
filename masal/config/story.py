"""
Story generation constants for the Masal story generator.
"""

# Story generation constants
STORY_CONSTANTS = {
    "target_page_count": 5,  # What the prompt asks for
    "min_pages": 4,
    "max_pages": 5,
    "language": "Turkish",
    "illustration_style": "Whimsical digital illustration, soft colors, Pixar style 3D render",
}

# User-facing messages, in the story language
USER_MESSAGES = {
    "generation_failed": "Üzgünüz, masalı oluştururken sihirli bir hata oluştu. Lütfen tekrar deneyin.",
    "quota_exhausted": "Hakkınız dolmuştur. Lütfen sürenin dolmasını bekleyin veya promosyon kodu kullanın.",
    "promo_applied": "Tebrikler! +1 Masal hakkı eklendi.",
    "promo_invalid": "Geçersiz promosyon kodu.",
    "promo_already_redeemed": "Bu cihazda daha önce promosyon kodu kullanıldı.",
}

# Language constraints per age group, keyed by AgeGroup value
AGE_CONSTRAINTS = {
    "3-5": "Very short sentences, simple words, lots of repetition, concrete concepts. At most 40-50 words per page.",
    "6-8": "Slightly more complex sentences, light adventure, cause and effect. At most 80-100 words per page.",
    "9+": "Rich vocabulary, detailed descriptions, a strong plot. At most 150 words per page.",
}

DEFAULT_AGE_CONSTRAINT = "Simple, easy-to-follow language."

# Appended to prompts before they go to the image model
COVER_PROMPT_SUFFIX = "Cinematic lighting, highly detailed cover art, title space at top."
PAGE_PROMPT_SUFFIX = "High quality, children's book illustration, warm lighting, 4k, detailed."
