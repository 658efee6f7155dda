from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base


class Group(Base):
    __tablename__ = 'groups'
    id = Column(Integer, primary_key=True, autoincrement=True)
    # "group" is a reserved word; SQLAlchemy quotes it for us
    name = Column('group', String(255), nullable=False)

    songs = relationship("Song", back_populates="group")

    __table_args__ = (
        Index('idx_groups_group', 'group'),
    )


class Song(Base):
    __tablename__ = 'songs'
    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey('groups.id'), nullable=False)
    song = Column(String(255), nullable=False)
    text = Column(Text, nullable=False, default='')
    release_date = Column(String(32), nullable=False, default='')
    link = Column(Text, nullable=False, default='')

    group = relationship("Group", back_populates="songs", lazy="joined")

    __table_args__ = (
        Index('idx_songs_group_id', 'group_id'),
    )

    @property
    def group_name(self) -> str:
        return self.group.name if self.group is not None else ''
