# forms/comment_form.py
"""
评论提交表单的字段描述。

前端按 fields 顺序渲染；提交时 CommentService.submit 按同样的字段名读取。
订阅通知复选框由 alter_comment_form 插入到正文字段之后。
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional

from constants.comment_notifications import NOTIFY_FIELD_ANCHOR, NOTIFY_FIELD_NAME, translate


@dataclass
class FormField:
    name: str
    field_type: str  # text / email / textarea / checkbox / hidden
    label: str = ""
    required: bool = False
    default: Any = None

    def to_dict(self):
        return asdict(self)


@dataclass
class Form:
    name: str
    fields: List[FormField] = field(default_factory=list)

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> Optional[FormField]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def insert_after(self, new_field: FormField, anchor: str):
        """插入到 anchor 字段之后；anchor 不存在时追加到末尾。"""
        for idx, f in enumerate(self.fields):
            if f.name == anchor:
                self.fields.insert(idx + 1, new_field)
                return
        self.fields.append(new_field)

    def to_dict(self):
        return {"name": self.name, "fields": [f.to_dict() for f in self.fields]}


def build_comment_form(locale: str | None = None) -> Form:
    form = Form(
        name="comment",
        fields=[
            FormField("parent_type", "hidden", required=True),
            FormField("parent_id", "hidden", required=True),
            FormField("author_name", "text", label="昵称" if locale != "en" else "Name"),
            FormField("author_email", "email", label="邮箱" if locale != "en" else "Email"),
            FormField("content", "textarea", label="评论" if locale != "en" else "Comments", required=True),
        ],
    )
    alter_comment_form(form, locale)
    return form


def alter_comment_form(form: Form, locale: str | None = None) -> Form:
    if form.get_field(NOTIFY_FIELD_NAME) is None:
        form.insert_after(
            FormField(
                NOTIFY_FIELD_NAME,
                "checkbox",
                label=translate("CommentInterface.NOTIFYOFUPDATES", locale),
                default=False,
            ),
            NOTIFY_FIELD_ANCHOR,
        )
    return form
