# Önerilen aktivite kategorileri. Sunucu tarafında zorunlu tutulmaz; serbest metin kabul edilir.
SUGGESTED_CATEGORIES = [
    "Yazılım",
    "Tasarım",
    "Analiz",
    "Toplantı",
    "Eğitim",
    "İçerik Üretimi",
    "Sosyal Medya",
    "Video Prodüksiyon",
    "Grafik Tasarım",
    "Web Tasarım",
    "Metin Yazarlığı",
    "Araştırma",
    "Diğer",
]

FALLBACK_CATEGORY = "Diğer"


def category_label(name) -> str:
    """Boş / eksik kategori → 'Diğer'."""
    label = (name or "").strip() if isinstance(name, str) else ""
    return label or FALLBACK_CATEGORY
