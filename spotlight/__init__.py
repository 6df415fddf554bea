"""
gnome-spotlight - set the Gnome wallpaper to the Windows Spotlight image of the day.
"""
