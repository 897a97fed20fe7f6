"""Server-rendered front-end: layouts, navigation, tab bars and page routes."""
