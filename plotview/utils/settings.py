from PySide6.QtCore import QSettings, Signal

# Defaults for settings that are accessed from multiple places.
DEFAULT_SETTINGS = {
    'records_file_path': '',
    # Virtualized list/table layout. Row heights are in pixels.
    'virtual_list_row_height': 44,
    'virtual_table_row_height': 56,
    'virtual_overscan': 6,  # Rows rendered above and below the visible band
    'virtual_viewport_fallback': 400,  # Assumed viewport height before first layout
    'sample_record_count': 5000,
}


class Settings(QSettings):
    # Signal that shows that the setting with the given string was changes
    change = Signal(str, object, name='settingsChanged')

    def __init__(self):
        super().__init__('plotview', 'plotview')

    def setValue(self, key, value):
        super().setValue(key, value)
        self.change.emit(key, value)

# Common shared instance to ensure the Signal is also shared
settings = Settings()


def get_int_setting(key: str) -> int:
    return settings.value(key, defaultValue=DEFAULT_SETTINGS[key], type=int)
