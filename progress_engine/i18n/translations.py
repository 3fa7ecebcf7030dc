"""
Progress message translations for multi-language support.

Uses simple dictionary approach. English is the fallback for unknown
languages and for keys missing from a language.
"""
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)

# Translation dictionaries: language_code -> {key: translated_string}
TRANSLATIONS: Dict[str, Dict[str, Any]] = {
    "en": {
        # Month labels
        "month_1": "January",
        "month_2": "February",
        "month_3": "March",
        "month_4": "April",
        "month_5": "May",
        "month_6": "June",
        "month_7": "July",
        "month_8": "August",
        "month_9": "September",
        "month_10": "October",
        "month_11": "November",
        "month_12": "December",

        # Motivational messages
        "motivation_goal_met": "🎉 You reached this week's goal! {streak}-day streak and counting.",
        "motivation_almost_there": "💪 Almost there! {days} days left.",
        "motivation_good_pace": "📈 You're keeping a good pace. Keep going!",
        "motivation_streak": "🔥 {streak}-day streak! Keep the momentum going.",
        "motivation_new_start": "🌟 A fresh start! Try journaling steadily from today.",

        # Week-over-week comparison
        "compare_first_week": "This is your first week on record! Start building the habit.",
        "compare_big_gain": "🚀 Up {change}% from last week! Amazing work!",
        "compare_gain": "📈 Improved {change}% over last week.",
        "compare_same": "Holding steady at the same level as last week.",
        "compare_drop": "Down {change}% from last week. Let's pick it back up!",

        # Goal prediction
        "predict_maintain_pace": "Keep your current pace and you will reach your goal!",
        "predict_push_more": "A little more effort and the goal is within reach.",
        "predict_need_per_day": "You need about {per_day} journal entries per day to reach your goal.",

        # Achievement display
        "achievements_title": "🏆 ACHIEVEMENTS ({unlocked}/{total}, {points} pts)",
        "achievements_empty": "No achievements yet. Write your first journal to get started! 🌱",
    },
    "ko": {
        "month_1": "1월",
        "month_2": "2월",
        "month_3": "3월",
        "month_4": "4월",
        "month_5": "5월",
        "month_6": "6월",
        "month_7": "7월",
        "month_8": "8월",
        "month_9": "9월",
        "month_10": "10월",
        "month_11": "11월",
        "month_12": "12월",

        "motivation_goal_met": "🎉 이번 주 목표를 달성했습니다! {streak}일 연속 기록 중이에요.",
        "motivation_almost_there": "💪 거의 다 왔어요! {days}일 남았습니다.",
        "motivation_good_pace": "📈 좋은 페이스로 진행 중이에요. 계속 화이팅!",
        "motivation_streak": "🔥 {streak}일 연속 기록 중! 이 기세를 유지해보세요.",
        "motivation_new_start": "🌟 새로운 시작! 오늘부터 꾸준히 기록해보세요.",

        "compare_first_week": "첫 주 기록이에요! 꾸준히 시작해보세요.",
        "compare_big_gain": "🚀 지난주보다 {change}% 향상되었어요! 대단해요!",
        "compare_gain": "📈 지난주보다 {change}% 개선되었어요.",
        "compare_same": "지난주와 동일한 수준을 유지하고 있어요.",
        "compare_drop": "지난주보다 {change}% 감소했어요. 다시 힘내봐요!",

        "predict_maintain_pace": "현재 페이스를 유지하면 목표를 달성할 수 있어요!",
        "predict_push_more": "조금 더 노력하면 목표 달성이 가능해요.",
        "predict_need_per_day": "목표 달성을 위해 하루 평균 {per_day}개의 일지가 필요해요.",

        "achievements_title": "🏆 성취 ({unlocked}/{total}, {points}점)",
        "achievements_empty": "아직 달성한 성취가 없어요. 첫 일지를 작성해보세요! 🌱",
    },
}


def t(key: str, lang: str = 'en', **kwargs) -> str:
    """
    Translate a key to the specified language with optional formatting.

    Args:
        key: Translation key (e.g., 'month_1', 'compare_gain')
        lang: Language code (defaults to 'en')
        **kwargs: Format arguments for string formatting

    Returns:
        Translated and formatted string. Falls back to English if key not found.

    Examples:
        t('month_3', lang='ko')
        t('compare_gain', lang='en', change=12)
    """
    if lang not in TRANSLATIONS:
        logger.info(f"Unsupported language '{lang}', falling back to English")

    lang_dict = TRANSLATIONS.get(lang, TRANSLATIONS['en'])

    translated = lang_dict.get(key, TRANSLATIONS['en'].get(key, f"[MISSING: {key}]"))

    if kwargs:
        try:
            return translated.format(**kwargs)
        except KeyError as e:
            logger.error(f"Translation formatting error for key '{key}': {e}")
            return translated

    return translated


def get_supported_languages() -> list[str]:
    """Return list of supported language codes"""
    return list(TRANSLATIONS.keys())
