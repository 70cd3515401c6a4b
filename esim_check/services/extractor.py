"""S3 — SIM spec extractor.

Walks every section of a device's detail spec looking for entries whose
name mentions "sim" and derives the eSIM verdict from the matched text.
"""

from esim_check.orchestrator.schemas import DeviceDetail, SimInfo

SIM_KEYWORD = "sim"
ESIM_KEYWORD = "esim"
VALUE_SEPARATOR = " | "


def extract_sim_info(device: DeviceDetail) -> SimInfo:
    """Return the raw SIM text and whether it mentions eSIM.

    When several entries match, the last one scanned wins. ``supportsEsim``
    stays None when no SIM entry exists at all.
    """
    sim_raw = None

    for section in device.detail_spec:
        for spec in section.specifications:
            if not spec.name or spec.value is None or spec.value == "":
                continue
            if SIM_KEYWORD in spec.name.lower():
                sim_raw = _value_text(spec.value)

    if not sim_raw:
        return SimInfo()

    return SimInfo(simRaw=sim_raw, supportsEsim=ESIM_KEYWORD in sim_raw.lower())


def _value_text(value: str | list[str]) -> str:
    if isinstance(value, list):
        return VALUE_SEPARATOR.join(value)
    return str(value)
