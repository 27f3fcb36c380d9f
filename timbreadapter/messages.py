"""User-facing text in the languages the adapter speaks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Language(Enum):
    """Languages the user interface text is available in."""

    ENGLISH = "en"
    CHINESE = "zh"


@dataclass(frozen=True)
class Messages:
    """All interface strings for one language."""

    app_name: str
    title: str
    info: str
    load_button: str
    analyse_button: str
    play_button: str
    stop_button: str
    export_button: str
    open_dialog_title: str
    export_dialog_title: str
    export_file_name: str
    open_failed: str
    loaded_prefix: str
    read_failed: str
    duration_error: str
    analysis_complete_prefix: str
    no_analysis: str
    load_prompt: str
    brightness_stat: str
    noise_stat: str
    attack_stat: str
    width_stat: str
    pitch_stat: str
    envelope_stat: str
    hint_pluck: str
    hint_lead: str
    hint_pad: str
    hint_noise: str
    hint_harmonics: str
    hint_stereo: str
    hint_balanced: str
    snapshot_rule: str
    snapshot_pitch: str
    snapshot_envelope: str
    general_envelope: str
    no_note: str


_ENGLISH = Messages(
    app_name="Timbre Adapter Desktop V2",
    title="Timbre Adapter | JUCE Desktop Prototype v2",
    info="Load an audio file, run local timbre analysis, and map the result to a synth-style panel.",
    load_button="Load Audio",
    analyse_button="Analyse",
    play_button="Play",
    stop_button="Stop",
    export_button="Export Snapshot",
    open_dialog_title="Load audio (1 to 15 seconds)",
    export_dialog_title="Export snapshot",
    export_file_name="timbre-adapter-snapshot-v2.json",
    open_failed="Could not open audio file.",
    loaded_prefix="Loaded: ",
    read_failed="Read failed.",
    duration_error="Audio must be between 1 and 15 seconds.",
    analysis_complete_prefix="Analysis complete: ",
    no_analysis="No analysis yet.",
    load_prompt="Load a short audio sample, then click Analyse.",
    brightness_stat="Brightness: ",
    noise_stat="Noise: ",
    attack_stat="Attack: ",
    width_stat="Stereo Width: ",
    pitch_stat="Dominant Pitch: ",
    envelope_stat="Envelope Type: ",
    hint_pluck="This sounds more like a pluck or mallet. Use short attack, short decay, and low sustain.",
    hint_lead="This sounds closer to a lead or key patch. Use low attack and medium sustain.",
    hint_pad="This sounds closer to a pad or swell. Raise attack and release.",
    hint_noise="Noise content is high. Add noise or breath texture if needed.",
    hint_harmonics="High harmonics are strong. Brighter waveforms or FM may help.",
    hint_stereo="Stereo spread is wide. Increase unison or chorus.",
    hint_balanced="Balanced timbre. Start with a saw plus sine mix and medium filter settings.",
    snapshot_rule="-" * 40,
    snapshot_pitch="Dominant Pitch: ",
    snapshot_envelope="Envelope: ",
    general_envelope="General",
    no_note="-",
)

_CHINESE = Messages(
    app_name="Timbre Adapter Desktop",
    title="音色适配器 | JUCE Desktop Prototype",
    info="加载音频后，本地快速分析音色并映射到 FL 风格参数面板。",
    load_button="加载音频",
    analyse_button="分析音色",
    play_button="播放",
    stop_button="停止",
    export_button="导出快照",
    open_dialog_title="选择 1–15 秒音频",
    export_dialog_title="导出快照",
    export_file_name="timbre-adapter-snapshot.json",
    open_failed="无法读取该音频文件。",
    loaded_prefix="已加载：",
    read_failed="读取失败。",
    duration_error="音频长度需要在 1–15 秒之间。",
    analysis_complete_prefix="分析完成：",
    no_analysis="",
    load_prompt="",
    brightness_stat="亮度 Brightness: ",
    noise_stat="噪声感 Noise: ",
    attack_stat="起音 Attack: ",
    width_stat="立体声宽度 Width: ",
    pitch_stat="主峰音高: ",
    envelope_stat="包络类型: ",
    hint_pluck="更像 pluck / mallet，建议短 Attack、短 Decay、低 Sustain。",
    hint_lead="更像 lead / key，建议中低 Attack、适中 Sustain。",
    hint_pad="更像 pad / swell，建议提高 Attack 和 Release。",
    hint_noise="噪声感偏高，可加入 noise / breath / unison blur。",
    hint_harmonics="高频谐波较多，适合 brighter wave / FM / saturation。",
    hint_stereo="立体声较宽，可提高 unison、stereo spread、chorus。",
    hint_balanced="这是一个比较均衡的音色，适合从 saw / sine mix + 中等滤波与包络开始复刻。",
    snapshot_rule="-" * 48,
    snapshot_pitch="Dominant pitch: ",
    snapshot_envelope="Envelope type: ",
    general_envelope="通用",
    no_note="—",
)

_CATALOGUE = {Language.ENGLISH: _ENGLISH, Language.CHINESE: _CHINESE}

_GENERAL = "General"


def messages_for(language: Union[Language, str]) -> Messages:
    """Interface strings for a language, given as a :class:`Language` or its code."""
    return _CATALOGUE[Language(language)]


def envelope_label(envelope_type: str, language: Union[Language, str]) -> str:
    """Display name of an envelope class; only the general class is translated."""
    if envelope_type == _GENERAL:
        return messages_for(language).general_envelope
    return envelope_type