"""
CourseGrid – weekly class timetable viewer for extracted course schedules.
"""
