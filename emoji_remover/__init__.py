"""
Run the external emoji-remover tool from an editor (or the command line).

Hosts wire it up with `PLUGIN.setup(registry, ctx)`; see `emoji_remover.plugin_api`.
"""
