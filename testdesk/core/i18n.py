# File: /testdesk/core/i18n.py | Version: 1.0 | Title: Message catalogues + request-locale Translator
from __future__ import annotations

from typing import Any, Dict, Optional

from testdesk.core.config import settings

MESSAGES: Dict[str, Dict[str, str]] = {
    "en_US": {
        "success": "Success",
        "internal_server_error": "Internal server error",
        "validation_error": "Validation error",
        "invalid_enum": "Invalid value {value} for {enum}",
        "check_owner_case": "You can only operate on views you created",
        "user_view.exist": "A view named \"{name}\" already exists",
        "user_view.all_data": "All data",
        "user_view.my_follow": "My follows",
        "user_view.my_create": "Created by me",
        "user_view.my_assign": "Assigned to me",
        "user_view.my_review": "My reviews",
        "user_view.archived": "Archived",
        "project_is_not_exist": "Project does not exist",
        "robot_is_not_exist": "Robot does not exist",
        "receiver_is_not_exist": "Receivers do not exist: {receivers}",
        "notice.receivers_partially_saved": "Saved; these receivers do not exist: {receivers}",
    },
    "zh_CN": {
        "success": "成功",
        "internal_server_error": "系统内部错误",
        "validation_error": "参数校验失败",
        "invalid_enum": "{enum} 不支持的值: {value}",
        "check_owner_case": "只能操作自己创建的视图",
        "user_view.exist": "视图名称 \"{name}\" 已存在",
        "user_view.all_data": "全部数据",
        "user_view.my_follow": "我关注的",
        "user_view.my_create": "我创建的",
        "user_view.my_assign": "待我处理",
        "user_view.my_review": "我评审的",
        "user_view.archived": "已归档",
        "project_is_not_exist": "项目不存在",
        "robot_is_not_exist": "机器人不存在",
        "receiver_is_not_exist": "接收人不存在: {receivers}",
        "notice.receivers_partially_saved": "保存成功, 以下接收人不存在: {receivers}",
    },
}


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def normalize_locale(raw: Optional[str]) -> str:
    """
    Pick a supported locale from an Accept-Language style value.
    'zh-CN,zh;q=0.9' -> 'zh_CN'; 'en' -> 'en_US'; unknown -> default.
    """
    if not raw:
        return settings.DEFAULT_LOCALE
    for part in raw.split(","):
        tag = part.split(";", 1)[0].strip().replace("-", "_")
        if not tag:
            continue
        for supported in MESSAGES:
            if supported.lower() == tag.lower():
                return supported
        lang = tag.split("_", 1)[0].lower()
        for supported in MESSAGES:
            if supported.split("_", 1)[0].lower() == lang:
                return supported
    return settings.DEFAULT_LOCALE


class Translator:
    def __init__(self, locale: Optional[str] = None):
        self.locale = locale if locale in MESSAGES else settings.DEFAULT_LOCALE

    def get(self, key: str, **params: Any) -> str:
        template = MESSAGES[self.locale].get(key)
        if template is None:
            template = MESSAGES.get(settings.DEFAULT_LOCALE, {}).get(key, key)
        if not params:
            return template
        return template.format_map(_KeepMissing(params))
